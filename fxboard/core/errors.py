from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

from fxboard.models.constants import UnsupportedCurrencyError
from fxboard.services.http_client import HttpError, RateFeedError
from fxboard.services.rates.conversion import (
    EmptyOrInvalidAmountError,
    UnknownCurrencyError,
)

logger = logging.getLogger("fxboard.errors")


def http_error_handler(request: Request, exc):  # type: ignore
    code = getattr(exc, "status_code", status.HTTP_404_NOT_FOUND)
    return JSONResponse(
        status_code=code,
        content={
            "error": "not_found" if code == status.HTTP_404_NOT_FOUND else "http_error",
            "detail": getattr(exc, "detail", None)
            or f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": exc.errors(),
        },
    )


def unsupported_currency_handler(request: Request, exc: UnsupportedCurrencyError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "unsupported_currency", "detail": str(exc)},
    )


def invalid_amount_handler(request: Request, exc: EmptyOrInvalidAmountError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "invalid_amount", "detail": str(exc)},
    )


def rate_feed_error_handler(request: Request, exc: RateFeedError):  # type: ignore
    content = {"error": "rate_feed_unavailable", "detail": str(exc)}
    if isinstance(exc, HttpError):
        content["upstream_status"] = exc.status
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=content)


def unknown_currency_handler(request: Request, exc: UnknownCurrencyError):  # type: ignore
    # Selector and rate table out of sync; report, never mask
    logger.error("unknown currency in conversion: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "unknown_currency", "detail": str(exc)},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
