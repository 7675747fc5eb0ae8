# Core modules

from .config import Settings, get_settings, settings
from .errors import (
    ErrorCode,
    ERROR_MESSAGES,
    CartException,
    StorageError,
    handle_error,
    log_error,
)

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "ErrorCode",
    "ERROR_MESSAGES",
    "CartException",
    "StorageError",
    "handle_error",
    "log_error",
]
