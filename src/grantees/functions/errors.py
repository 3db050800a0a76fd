"""Error type for the serverless-function endpoints.

Function endpoints answer failures as ``{"error": message}`` (plus optional
context such as ``required``/``available``) instead of ``{"detail": ...}``.
"""

from __future__ import annotations

from typing import Any


class FunctionError(Exception):
    """An HTTP failure rendered in the function error format."""

    def __init__(self, status_code: int, message: str, **context: Any) -> None:  # noqa: ANN401
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.context = context

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, **self.context}
