"""Middleware registration."""

from fastapi import FastAPI

from grantees.config import Settings
from grantees.middleware.cors import setup_cors
from grantees.middleware.error_handler import setup_error_handlers
from grantees.middleware.logging import setup_logging
from grantees.middleware.rate_limit import RateLimitMiddleware
from grantees.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure logging and error handlers, then the middleware stack.

    Request order, outermost first: CORS, request id, rate limit. Starlette
    wraps in reverse-add order, so CORS is added last and its headers reach
    429 and error responses too.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
