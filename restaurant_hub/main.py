"""FastAPI entrypoint for the Restaurant Hub ordering API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant_hub.api.router import api_router
from restaurant_hub.core.config import settings
from restaurant_hub.core.errors import register_exception_handlers
from restaurant_hub.db import session as db_session
from restaurant_hub.db.base import Base
from restaurant_hub.db.seed import ensure_admin_user
from restaurant_hub.schemas.common import Envelope

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            admin_present = ensure_admin_user(session)
            logger.info("[BOOTSTRAP] admin present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Admin seed failed; continuing startup.")
    logger.info("[BOOTSTRAP] %s started (env=%s)", settings.app_name, settings.app_env)


@app.get("/api/health", response_model=Envelope[dict[str, Any]], tags=["health"])
def health() -> Envelope[dict[str, Any]]:
    return Envelope[dict[str, Any]](
        data={
            "status": "OK",
            "environment": settings.app_env,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        message="Restaurant Hub API is running",
    )


def run() -> None:
    """Console-script entrypoint."""
    configure_logging()
    uvicorn.run("restaurant_hub.main:app", host=settings.host, port=settings.port, reload=settings.debug)
