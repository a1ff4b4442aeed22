"""HTTP mapping for storefront errors.

Protean's own exceptions (``ValidationError``, ``ObjectNotFoundError`` and
friends) are handled by ``protean.integrations.fastapi.register_exception_handlers``.
This module adds the storefront errors on top.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain import logger
from storefront.errors import (
    ConcurrentModificationError,
    ConstraintViolationError,
    EmptyCartError,
    NotFoundError,
    StorefrontError,
)

STATUS_CODES = {
    NotFoundError: 404,
    EmptyCartError: 422,
    ConcurrentModificationError: 409,
    ConstraintViolationError: 409,
}


def _handler(status_code: int):
    async def handle(request: Request, exc: StorefrontError) -> JSONResponse:
        logger.info(
            "storefront_error",
            error=type(exc).__name__,
            path=request.url.path,
            status_code=status_code,
        )
        return JSONResponse(status_code=status_code, content={"error": exc.messages})

    return handle


def register_error_handlers(app: FastAPI) -> None:
    for exc_class, status_code in STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler(status_code))
