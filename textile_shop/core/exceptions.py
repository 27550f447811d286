# textile_shop/core/exceptions.py
"""
Domain errors raised by the catalog and cart core.

None of these are fatal: callers surface them to the shopper and re-prompt.
The HTTP translation lives in `register_exception_handlers`.
"""
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class StorefrontError(Exception):
    """Base class for caller-recoverable storefront errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message}


class CatalogConfigurationError(Exception):
    """The static fabric table is inconsistent. Raised at import, never mapped."""


class UnknownFabricType(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, type_key: object):
        super().__init__(f"Unknown fabric type: {type_key!r}")
        self.type_key = type_key


class InvalidLineItem(StorefrontError):
    """
    A candidate cart line failed validation.

    `reasons` maps each failing field name to a short message.
    """

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT

    def __init__(self, reasons: dict[str, str]):
        fields = ", ".join(reasons)
        super().__init__(f"Invalid cart line item ({fields})")
        self.reasons = dict(reasons)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.reasons)

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message, "errors": self.reasons}


class ItemNotFound(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, product_id: str):
        super().__init__(f"Item not in cart: {product_id}")
        self.product_id = product_id


class InvalidQuantity(StorefrontError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT

    def __init__(self, quantity: object):
        super().__init__(f"Quantity must be a finite number >= 1, got {quantity!r}")
        self.quantity = quantity


async def _storefront_error_handler(
    request: Request, exc: StorefrontError
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Translate domain errors into JSON responses.

    Subclasses are matched through the base class handler.
    """
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
