"""
Error taxonomy.

- ValidationError: a required field is missing (company name)
- StoreError: any failure from PostgreSQL or MongoDB, carrying a
  human-readable message. Never retried; surfaced to the client as-is.

Lenient parse failures are not errors - see utils/parsing.py.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a required field is missing from submitted form state."""


class StoreError(Exception):
    """Raised when the storage collaborator fails during a fetch or write."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.warning("Store error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=502, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Attach handlers that turn domain errors into JSON responses."""
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
