"""Global exception handlers — map service exceptions to HTTP status codes.

The service raises ``ValueError`` for various conditions (case not found,
duplicate national id, malformed id, AI writer missing).  Rather than
catching these in every route, we install global handlers that inspect the
message and pick the right HTTP status code.  Errors from the OpenAI client
get their own handlers.
"""

import logging

import openai
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    # Duplicate national id
    ("already exists", 409),
    # Case / questionnaire not found
    ("not found", 404),
    # No OpenAI key at startup
    ("not configured", 503),
    # Malformed id, empty vitals, non-object answers
    ("invalid", 400),
]


# --- Client-safe messages keyed by HTTP status code ---
# Internal details (ids, national ids) stay in the server log; the client
# receives only a generic description.
_SAFE_MESSAGES: dict[int, str] = {
    404: "Resource not found",
    409: "Resource already exists",
    503: "Service unavailable",
    400: "Invalid request",
}


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map service ``ValueError`` to a contextual HTTP error response.

    Falls back to 400 for unrecognised messages.  The raw exception message
    is logged server-side but never sent to the client.
    """
    msg = str(exc)
    status = 400  # default
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    safe_detail = _SAFE_MESSAGES.get(status, "Invalid request")
    return JSONResponse(status_code=status, content={"detail": safe_detail})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown pathway id) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def openai_error_handler(request: Request, exc: openai.APIError) -> JSONResponse:
    """Map OpenAI client failures to 429 / 401 / 502."""
    if isinstance(exc, openai.RateLimitError):
        status, detail = 429, "AI service quota exceeded"
    elif isinstance(exc, openai.AuthenticationError):
        status, detail = 401, "AI service credentials rejected"
    else:
        status, detail = 502, "AI service error"
    logger.error("OpenAI error [%d] at %s: %s", status, request.url, exc)
    return JSONResponse(status_code=status, content={"detail": detail})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
