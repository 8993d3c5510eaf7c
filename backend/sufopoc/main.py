import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import database
from .api import admin as admin_api
from .api import applications as applications_api
from .api import auth as auth_api
from .api import business as business_api
from .api import contact as contact_api
from .api import dashboards as dashboards_api
from .api import jobs as jobs_api
from .api import onboarding as onboarding_api
from .api import opleidingen as opleidingen_api
from .api import users as users_api
from .config import FRONTEND_ORIGINS, LOG_LEVEL
from .utils.error_handlers import AppError, create_error_response, get_error_message
from .utils.route_guard import route_guard_middleware

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

ROUTERS = (
    auth_api.router,
    admin_api.router,
    jobs_api.router,
    opleidingen_api.router,
    applications_api.router,
    onboarding_api.router,
    users_api.router,
    business_api.router,
    contact_api.router,
    dashboards_api.router,
)


def _validation_details(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        details.append({"field": ".".join(loc) or None, "message": err.get("msg")})
    return details


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Typed errors raised by services and dependencies."""
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTPException with user-friendly messages."""
        return create_error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed input is a 400 with per-field details."""
        return create_error_response(400, get_error_message("validation_error"), _validation_details(exc))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle general database errors."""
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("database_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors globally."""
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))


def create_app() -> FastAPI:
    app = FastAPI(title="Sufopoc")

    for router in ROUTERS:
        app.include_router(router)

    register_error_handlers(app)

    app.middleware("http")(route_guard_middleware)

    _default_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[*_default_origins, *FRONTEND_ORIGINS],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "Backend running",
            "service": "Sufopoc"
        }

    @app.on_event("startup")
    def on_startup() -> None:
        try:
            database.init_db()
            app.state.db_init_error = None
        except Exception as e:
            # Boot anyway; /db/health reports the failure.
            logger.exception("Database initialisation failed: %s", e)
            app.state.db_init_error = type(e).__name__

    @app.get("/db/health")
    def db_health():
        if getattr(app.state, "db_init_error", None):
            return create_error_response(503, get_error_message("database_error"))

        try:
            with database.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error("DB health check failed: %s", e)
            return create_error_response(503, get_error_message("database_error"))

        return {"status": "ok"}

    return app


app = create_app()
