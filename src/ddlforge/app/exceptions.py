"""
Application Exceptions
======================

Maps generation exceptions to HTTP status codes.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ddlforge.api.schemas import ErrorResponse


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message)
EXCEPTION_MAP = {
    # Dialect selection
    "UnsupportedDialectError": (400, "The requested database dialect is not supported."),

    # Validation & ordering
    "SchemaValidationError": (422, "The schema failed validation."),
    "DependencyCycleError": (422, "The schema contains circular dependencies."),

    # Package generation
    "PackageGenerationError": (422, "Failed to generate a CRUD package for the table."),
    "UtilityContractError": (422, "List query parameters were rejected."),

    # Anything else raised by the engine
    "GenerationError": (500, "Script generation failed."),
}


def _lookup(exc: Exception) -> tuple[int, str]:
    exc_name = type(exc).__name__
    if exc_name in EXCEPTION_MAP:
        return EXCEPTION_MAP[exc_name]
    return 500, "Internal system error."


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, user_message = _lookup(exc)
    if status_code >= 500:
        logger.exception("Request failed: %s", exc)

    return HTTPException(
        status_code=status_code,
        detail={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, user_message = _lookup(exc)
    logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=user_message, detail=str(exc)).model_dump()
    )
