"""Error codes, messages and exceptions for the cart subsystem"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error categories surfaced by the cart"""
    OUT_OF_STOCK = "OUT_OF_STOCK"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    SOME_ITEMS_UNAVAILABLE = "SOME_ITEMS_UNAVAILABLE"
    PERSISTENCE_LOAD_FAILED = "PERSISTENCE_LOAD_FAILED"
    PERSISTENCE_WRITE_FAILED = "PERSISTENCE_WRITE_FAILED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.OUT_OF_STOCK: "Product is out of stock",
    ErrorCode.INVALID_QUANTITY: "Invalid quantity specified",
    ErrorCode.SOME_ITEMS_UNAVAILABLE: "Some items in your cart are no longer available",
    ErrorCode.PERSISTENCE_LOAD_FAILED: "Failed to load cart",
    ErrorCode.PERSISTENCE_WRITE_FAILED: "Failed to save cart",
    ErrorCode.UNKNOWN_ERROR: "An unexpected error occurred",
}


class CartException(Exception):
    """Base exception for failures at the cart's infrastructure boundary"""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: Optional[str] = None, code: Optional[ErrorCode] = None):
        if code is not None:
            self.code = code
        self.message = message or ERROR_MESSAGES[self.code]
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)


class StorageError(CartException):
    """A storage backend could not complete a read or write"""
    code = ErrorCode.PERSISTENCE_WRITE_FAILED


def handle_error(error: BaseException):
    """Normalise any exception into a CartError value"""
    from ..models.cart import CartError

    if isinstance(error, CartException):
        return CartError(code=error.code, message=error.message, timestamp=error.timestamp)
    return CartError.of(ErrorCode.UNKNOWN_ERROR, str(error) or None)


def log_error(error: Any, context: Optional[dict[str, Any]] = None) -> None:
    """Log a CartError or CartException with optional context"""
    code = getattr(error, "code", ErrorCode.UNKNOWN_ERROR)
    message = getattr(error, "message", str(error))
    timestamp = getattr(error, "timestamp", datetime.now(timezone.utc))
    logger.error(
        f"{ErrorCode(code).value}: {message}",
        extra={
            "error_code": ErrorCode(code).value,
            "error_timestamp": timestamp.isoformat(),
            "context": context or {},
        },
    )
