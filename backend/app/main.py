import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.api.router import api_router
from app.api.routes.health import router as health_router
from app.config import settings
from app.core.observability import install_exception_handlers, request_logging_middleware
from app.database import POOL_CONFIG, SessionLocal
from app.services.auth import seed_defaults

api_prefix = (
    settings.api_prefix
    if settings.api_prefix.startswith("/")
    else f"/{settings.api_prefix}"
    if settings.api_prefix
    else ""
)

logger = logging.getLogger("raas")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

app = FastAPI(
    title=settings.app_name,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url=(f"{api_prefix}/openapi.json" if api_prefix else "/openapi.json")
    if settings.docs_enabled
    else None,
)

# Expose logger for middleware without creating circular imports.
app.state.logger = logger

install_exception_handlers(app)

# Request-level logging + request correlation id.
app.middleware("http")(request_logging_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=api_prefix)
if api_prefix:
    # Probes hit the root regardless of the API prefix.
    app.include_router(health_router)


def _run_migrations_if_configured() -> None:
    if not settings.run_migrations_on_start or settings.is_test:
        return

    from alembic import command
    from alembic.config import Config

    backend_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(backend_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_root / "alembic"))
    try:
        command.upgrade(alembic_cfg, "head")
        logger.info("migrations_applied")
    except SQLAlchemyError as e:
        # Don't crash the API; endpoints needing the DB will surface errors.
        logger.error("migrations_failed", extra={"error": str(e)})


def _seed_defaults_if_configured() -> None:
    if not settings.seed_defaults or settings.is_test or settings.is_production:
        return

    db = SessionLocal()
    try:
        seed_defaults(db)
    except SQLAlchemyError as e:
        # Database not ready yet (e.g., missing tables) - don't block startup.
        logger.warning("default_seed_failed", extra={"error": str(e)})
        db.rollback()
    finally:
        db.close()


@app.on_event("startup")
def _startup():
    logger.info(
        "runtime_config",
        extra={
            "pid": os.getpid(),
            "environment": settings.environment,
            "db_pool": POOL_CONFIG,
        },
    )
    _run_migrations_if_configured()
    _seed_defaults_if_configured()


@app.get("/", tags=["meta"])
def root():
    docs_path = (
        (f"{api_prefix}/openapi.json" if api_prefix else "/openapi.json")
        if settings.docs_enabled
        else None
    )
    return {"message": settings.app_name, "docs": docs_path}
