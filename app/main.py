"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handling import register_exception_handlers
from app.api.middleware import IdentityMiddleware
from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.services.member_cache import MemberCache
from app.services.tokens import TokenService


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build an application with its own token service and member cache.

    Each call produces an independent instance, so tests can run apps with
    different secrets side by side.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    token_service = TokenService.from_settings(settings)

    app = FastAPI(
        title="Members API",
        version="0.1.0",
        description="Member management with JWT authentication and role-based access.",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_service = token_service
    app.state.member_cache = MemberCache()

    app.add_middleware(IdentityMiddleware, tokens=token_service)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Members API"}

    return app


app = create_app()
