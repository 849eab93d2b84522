from fastapi import Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    EndpointUnavailable,
    TransactionError,
    UnresolvedModuleAddress,
    VALIDATION_ERRORS,
)


def status_for(exc: TransactionError) -> int:
    """HTTP status a caller can act on for an engine error."""
    if isinstance(exc, VALIDATION_ERRORS):
        return 400
    if isinstance(exc, (EndpointUnavailable, UnresolvedModuleAddress)):
        return 503
    return 500


async def transaction_error_handler(request: Request, exc: TransactionError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={
            "detail": exc.message,
            "category": exc.context.category.value,
            "retriable": exc.context.retriable,
            "suggested_action": exc.context.suggested_action,
        },
    )
