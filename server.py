#!/usr/bin/env python3
# server.py — runs the Houston Local Loop web app (FastAPI + MongoDB)

import uvicorn

from app.config import settings

# ===== Main =====
if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=False,
    )
