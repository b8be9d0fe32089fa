"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises ``ValueError`` for bad input (unknown question ids, empty
answer batches) and for missing resources.  Rather than catching these in
every route, global handlers inspect the message and pick the status code.
Malformed path identifiers are reported as 404; malformed bodies and query
parameters as 400.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("not found", 404),
    ("unknown", 400),
]

# Client-safe messages; the raw exception text stays in the server log.
_SAFE_MESSAGES: dict[int, str] = {
    404: "Resource not found",
    400: "Invalid request",
}


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map SDK ``ValueError`` to 404 or 400 based on its message."""
    msg = str(exc)
    status = 400
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    return JSONResponse(
        status_code=status,
        content={"detail": _SAFE_MESSAGES.get(status, "Invalid request")},
    )


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown catalog entry) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Invalid path identifiers are not found; other malformed input is a bad request."""
    errors = exc.errors()
    in_path = any(tuple(e.get("loc", ()))[:1] == ("path",) for e in errors)
    status = 404 if in_path else 400
    logger.info("Validation error [%d] at %s: %s", status, request.url, errors)
    return JSONResponse(status_code=status, content={"detail": _SAFE_MESSAGES[status]})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
