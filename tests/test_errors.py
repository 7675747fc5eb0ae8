"""
Tests for cart error codes and error helpers
"""

import logging

from storefront_cart import models
from storefront_cart.core import errors
from storefront_cart.core.config import Settings
from storefront_cart.core.errors import (
    ERROR_MESSAGES,
    CartException,
    ErrorCode,
    StorageError,
    handle_error,
    log_error,
)


class TestErrorCodes:
    def test_taxonomy(self):
        assert {code.value for code in ErrorCode} == {
            "OUT_OF_STOCK",
            "INVALID_QUANTITY",
            "SOME_ITEMS_UNAVAILABLE",
            "PERSISTENCE_LOAD_FAILED",
            "PERSISTENCE_WRITE_FAILED",
            "UNKNOWN_ERROR",
        }

    def test_every_code_has_a_message(self):
        assert set(ERROR_MESSAGES) == set(ErrorCode)

    def test_no_unused_exports(self):
        assert not hasattr(errors, "InvalidQuantityError")
        assert "ProductSearchRequest" not in models.__all__
        assert "currency" not in Settings.model_fields
        assert "currency" not in models.Product.model_fields


class TestHandleError:
    def test_cart_exception_keeps_code(self):
        error = handle_error(StorageError("disk full"))

        assert error.code == ErrorCode.PERSISTENCE_WRITE_FAILED
        assert error.message == "disk full"

    def test_default_message(self):
        assert CartException().message == ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR]

    def test_other_exception_is_unknown(self):
        error = handle_error(KeyError("x"))
        assert error.code == ErrorCode.UNKNOWN_ERROR


class TestLogError:
    def test_logs_code_and_message(self, caplog):
        with caplog.at_level(logging.ERROR):
            log_error(models.CartError.of(ErrorCode.OUT_OF_STOCK), {"product_id": "prod-a"})

        assert "OUT_OF_STOCK: Product is out of stock" in caplog.text
        assert caplog.records[0].context == {"product_id": "prod-a"}
