from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from briefdesk.api.router import api_router
from briefdesk.core.config import settings
from briefdesk.core.security import constant_time_equals
from briefdesk.db.init_db import ensure_seeded
from briefdesk.db.session import Base, SessionLocal, engine
from briefdesk.services.watchers import registry

logger = logging.getLogger(__name__)

_UNSAFE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_CSRF_EXEMPT_PATHS = frozenset({"/auth/login", "/auth/logout"})


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name)

    origins = settings.cors_origins or ["http://localhost:5173"]
    logger.info("CORS allow_origins=%s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.middleware("http")
    async def _csrf_middleware(request: Request, call_next):
        """
        Production CSRF protection for cookie-auth endpoints.
        - Only enforced in production.
        - Only for unsafe methods and only when the session cookie is present.
        - Login/logout are exempt; /tasks uses its own header token.
        """
        if settings.environment == "production" and request.method.upper() in _UNSAFE_METHODS:
            path = request.url.path.rstrip("/") or "/"
            exempt = path in _CSRF_EXEMPT_PATHS or path.startswith("/tasks/")
            if not exempt and request.cookies.get(settings.jwt_cookie_name):
                csrf_cookie = request.cookies.get(settings.csrf_cookie_name)
                csrf_header = request.headers.get("X-CSRF-Token")
                if not constant_time_equals(csrf_cookie, csrf_header):
                    return JSONResponse(status_code=403, content={"detail": "CSRF token missing/invalid"})
        return await call_next(request)

    @app.on_event("startup")
    def _startup() -> None:
        """
        Local-dev helper: allow running without Postgres by using SQLite.
        - Creates tables (without Alembic) when DATABASE_URL points at sqlite.
        - Seeds the admin account and lookup rows so login works immediately.
        """
        db_url = settings.database_url or ""
        if settings.environment == "development" and db_url.startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
            db = SessionLocal()
            try:
                ensure_seeded(db)
            finally:
                db.close()
        logger.info("Change tracking active for: %s", ", ".join(registry.registered_types()))

    app.include_router(api_router)
    return app


app = create_app()
