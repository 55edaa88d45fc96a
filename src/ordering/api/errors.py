"""HTTP mapping for transient failures.

Validation and not-found errors are mapped by protean's FastAPI integration;
these handlers cover storage that could not be reached, where the client
should retry with the same request.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ordering.checkout.session import RETRY_MESSAGE

logger = structlog.get_logger(__name__)


async def _transient_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(
        "Transient failure while handling request",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=503, content={"error": RETRY_MESSAGE, "retryable": True})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConnectionError, _transient_error_handler)
    app.add_exception_handler(TimeoutError, _transient_error_handler)
