from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .models.constants import UnsupportedCurrencyError
from .services.http_client import RateFeedError
from .services.rates.conversion import EmptyOrInvalidAmountError, UnknownCurrencyError
from .services.rates.service import RateService, build_rate_service, get_rate_service
from .routers import health, rates, convert


def create_app(
    settings_override: Settings | None = None,
    rate_service: RateService | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    rate_service: inject a prebuilt RateService (e.g. fake source, fixed clock).
    When omitted with a settings override, one is built from those settings.
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings

    if rate_service is None and settings_override is not None:
        rate_service = build_rate_service(settings)
    if rate_service is not None:
        app.dependency_overrides[get_rate_service] = lambda: rate_service

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(UnsupportedCurrencyError, errors.unsupported_currency_handler)
    app.add_exception_handler(EmptyOrInvalidAmountError, errors.invalid_amount_handler)
    app.add_exception_handler(RateFeedError, errors.rate_feed_error_handler)
    app.add_exception_handler(UnknownCurrencyError, errors.unknown_currency_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(convert.router)

    @app.get("/")
    async def root():
        return {
            "message": f"{settings.app_name} API",
            "version": settings.version,
            "default_base": settings.default_base_currency,
            "pivot": settings.pivot_currency,
        }

    return app


app = create_app()
