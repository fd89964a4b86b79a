import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from menuhub.config import settings
from menuhub.core.rate_limit import limiter
from menuhub.database.supabase_client import ANON, directory_clients
from menuhub.modules.tenants.errors import NotAuthenticated
from menuhub.modules.tenants.service import build_session_manager
from menuhub.modules.auth import routes as auth_routes
from menuhub.modules.tenants import routes as tenants_routes
from menuhub.modules.restaurants import routes as restaurants_routes
from menuhub.modules.keepalive import routes as keepalive_routes
from menuhub.modules.translation import routes as translation_routes
from menuhub.modules.contact import routes as contact_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

ROUTERS = [
    auth_routes.router,
    tenants_routes.router,
    restaurants_routes.router,
    keepalive_routes.router,
    translation_routes.router,
    contact_routes.router,
]

SECURITY_HEADERS = [
    (b"X-Content-Type-Options", b"nosniff"),
    (b"X-Frame-Options", b"DENY"),
    (b"X-XSS-Protection", b"1; mode=block"),
    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
]


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + SECURITY_HEADERS
            await send(message)

        await self.app(scope, receive, send_wrapper)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sessions = app.state.session_manager
    logger.info(f"{settings.app_name} starting ({settings.environment})")
    logger.info(f"Durable session storage: {sessions.durable.path}")
    if sessions.get_active_credential() is not None:
        logger.info("Found a stored restaurant session")
    yield
    logger.info(f"{settings.app_name} stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.limiter = limiter
    # One session manager per process; routes reach it through get_session_manager
    app.state.session_manager = build_session_manager(settings)

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(NotAuthenticated)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        detail = "Internal server error" if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content={"detail": detail})

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/")
    async def root():
        return {"service": settings.app_name, "status": "healthy"}

    @app.get("/health")
    @limiter.exempt
    async def health():
        return {"status": "healthy"}

    @app.get("/ready")
    @limiter.exempt
    async def ready():
        """Readiness: directory configured, plus whether a restaurant session is stored."""
        return {
            "status": "ready",
            "directory_configured": bool(directory_clients.url and directory_clients.keys[ANON]),
            "restaurant_session": app.state.session_manager.get_active_credential() is not None,
        }

    return app


app = create_app()
