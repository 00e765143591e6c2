"""Home view state and its transitions.

Every transition is a pure function returning a new ``HomeState`` (and, for
the navigation transitions, an optional ``Navigation``). The HTTP layer in
``app.main`` replays them per request.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from app.zipcodes import is_valid_zipcode, sanitize_zip_input, zip_path

INVALID_ZIP_MESSAGE = "Please enter a valid 5-digit ZIP code"
AUTH_VIEWS = ("signin", "signup")

@dataclass(frozen=True)
class Navigation:
    path: str

@dataclass(frozen=True)
class HomeState:
    zipcode: str = ""
    error: Optional[str] = None
    auth_modal_open: bool = False
    auth_modal_view: str = "signin"

def on_zip_input(state: HomeState, raw: Optional[str]) -> HomeState:
    return replace(state, zipcode=sanitize_zip_input(raw), error=None)

def on_submit(state: HomeState) -> Tuple[HomeState, Optional[Navigation]]:
    if not is_valid_zipcode(state.zipcode):
        return replace(state, error=INVALID_ZIP_MESSAGE), None
    return state, Navigation(zip_path(state.zipcode))

def on_quick_zip(state: HomeState, zipcode: str) -> Tuple[HomeState, Navigation]:
    # popular codes are known-valid constants
    return state, Navigation(zip_path(zipcode))

def open_auth(state: HomeState, view: str) -> HomeState:
    if view not in AUTH_VIEWS:
        view = "signin"
    return replace(state, auth_modal_open=True, auth_modal_view=view)

def close_auth(state: HomeState) -> HomeState:
    return replace(state, auth_modal_open=False)
