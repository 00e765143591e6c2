import datetime as dt
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import db, ensure_indexes
from app.formatting import format_event_date, format_event_time
from app.home import HomeState, close_auth, on_submit, on_zip_input, open_auth
from app.services.auth import AuthClient, AuthContext, get_auth_client, get_auth_context
from app.services.neighborhoods import (
    NeighborhoodRepository,
    ZipNotFound,
    get_repository,
    load_zip_page,
)
from app.zipcodes import FEATURED_NEIGHBORHOODS, POPULAR_ZIPCODES

# ===== Logging =====
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)

# ===== Templates =====
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["event_date"] = format_event_date
templates.env.filters["event_time"] = format_event_time
templates.env.globals["app_name"] = settings.APP_NAME

# ===== App =====
app = FastAPI(title=settings.APP_NAME)

@app.on_event("startup")
async def startup_db_client():
    db.connect()
    await ensure_indexes()

@app.on_event("shutdown")
async def shutdown_db_client():
    db.close()

@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return templates.TemplateResponse(request, "not_found.html", {}, status_code=404)
    return await http_exception_handler(request, exc)

# ===== Utils =====
def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()

def render_home(request: Request, state: HomeState, auth: AuthContext, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "state": state,
            "auth": auth,
            "popular_zipcodes": POPULAR_ZIPCODES,
            "featured": FEATURED_NEIGHBORHOODS,
        },
        status_code=status_code,
    )

# ===== Endpoints =====
@app.get("/health")
async def health():
    return {"ok": True, "ts": now_iso()}

@app.get("/")
async def home(
    request: Request,
    auth_view: Optional[str] = Query(None, alias="auth"),
    auth: AuthContext = Depends(get_auth_context),
):
    state = HomeState()
    if auth_view and not auth.signed_in:
        state = open_auth(state, auth_view)
    else:
        state = close_auth(state)
    return render_home(request, state, auth)

@app.get("/search")
async def search(
    request: Request,
    zipcode: Optional[str] = None,
    auth: AuthContext = Depends(get_auth_context),
):
    state, nav = on_submit(on_zip_input(HomeState(), zipcode))
    if nav is None:
        return render_home(request, state, auth, status_code=400)
    return RedirectResponse(nav.path, status_code=303)

@app.get("/zip/{zipcode}")
async def zip_page(
    request: Request,
    zipcode: str,
    repo: NeighborhoodRepository = Depends(get_repository),
):
    try:
        page = await load_zip_page(repo, zipcode)
    except ZipNotFound:
        logger.info("ZIP page not found: %s", zipcode)
        raise HTTPException(status_code=404, detail="ZIP code not found")
    return templates.TemplateResponse(
        request,
        "zip.html",
        {"page": page},
    )

@app.post("/signout")
async def signout(
    request: Request,
    client: Optional[AuthClient] = Depends(get_auth_client),
):
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token and client is not None:
        await client.sign_out(token)
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response
