"""CORS for the web app, which calls both the REST API and the function endpoints."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grantees.config import Settings

# Sent by the browser client on every function invocation
FUNCTION_CLIENT_HEADERS = ("authorization", "x-client-info", "apikey", "content-type")

# No route deletes anything
ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "OPTIONS")


def setup_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=list(ALLOWED_METHODS),
        allow_headers=list(FUNCTION_CLIENT_HEADERS),
        expose_headers=["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit"],
    )
