"""
Error kinds raised by the catalog core.

The HTTP layer maps them onto status codes (see productdb.main);
storage failures are not wrapped and propagate as SQLAlchemy errors.
"""


class ProductDBError(Exception):
    """Base class for all expected catalog errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProductDBError):
    """Malformed or inconsistent input (400)."""


class ConflictError(ProductDBError):
    """Uniqueness violation on the external product id (409)."""


class NotFoundError(ProductDBError):
    """The target of an operation does not exist (404)."""
