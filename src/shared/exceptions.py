"""Application errors that Protean does not already provide.

Invariant violations and missing records use ``protean.exceptions.ValidationError``
and ``protean.exceptions.ObjectNotFoundError``; the API layer maps all of them
to HTTP status codes (see ``shared.api.register_exception_handlers``).
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InsufficientStockError(ValidationError):
    def __init__(self, product_name, requested, available):
        super().__init__(
            {
                "quantity": [
                    f"Not enough stock for product {product_name}. Requested: {requested}, Available: {available}"
                ]
            }
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


class CRMError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConflictError(CRMError):
    pass


class AuthenticationError(CRMError):
    pass


class PermissionDeniedError(CRMError):
    pass


def not_found(message: str):
    """Build an ``ObjectNotFoundError`` carrying a readable message."""
    return ObjectNotFoundError({"_entity": message})
