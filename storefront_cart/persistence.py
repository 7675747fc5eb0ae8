"""Bridges cart state changes to key-value storage.

Loading never raises: a missing, unreadable or malformed blob yields an
empty cart. Writes are best-effort; failures are logged and the
in-memory cart stays authoritative. Rapid successive writes are
coalesced so only the newest snapshot is written, in order.
"""

import asyncio
import logging
from typing import Any, Optional

from pydantic import ValidationError

from .core.errors import ErrorCode, handle_error, log_error
from .database.storage import KeyValueStorage
from .models.cart import Cart, CartError, CartState
from .store import CartStore

logger = logging.getLogger(__name__)


class CartPersistence:
    """Loads the saved cart once and saves it after every settled change"""

    def __init__(self, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key
        self._pending: Optional[dict[str, Any]] = None
        self._writer: Optional[asyncio.Task] = None

    async def load(self) -> Cart:
        """Read and parse the saved cart, falling back to an empty one"""
        try:
            raw = await asyncio.to_thread(self.storage.get, self.key, None)
        except Exception as e:
            log_error(
                CartError.of(ErrorCode.PERSISTENCE_LOAD_FAILED, f"Failed to load cart: {e}"),
                {"key": self.key},
            )
            return Cart()

        if raw is None:
            logger.info(f"No saved cart under {self.key!r}, starting empty")
            return Cart()

        try:
            cart = Cart.model_validate(raw)
        except ValidationError as e:
            log_error(
                CartError.of(
                    ErrorCode.PERSISTENCE_LOAD_FAILED,
                    f"Discarding malformed saved cart ({e.error_count()} errors)",
                ),
                {"key": self.key},
            )
            self._discard()
            return Cart()

        logger.info(f"Loaded cart with {len(cart.items)} lines from {self.key!r}")
        return cart

    def _discard(self) -> None:
        try:
            self.storage.remove(self.key)
        except Exception as e:
            log_error(handle_error(e), {"key": self.key, "operation": "remove"})

    @staticmethod
    def snapshot(cart: Cart) -> dict[str, Any]:
        """JSON-compatible form of the persisted cart fields"""
        return cart.model_dump(mode="json")

    def save(self, cart: Cart) -> None:
        """Queue a best-effort write of the cart"""
        self._pending = self.snapshot(cart)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: write inline.
            self._write(self._take_pending())
            return

        if self._writer is None or self._writer.done():
            self._writer = loop.create_task(self._drain())

    def on_change(self, old: CartState, new: CartState) -> None:
        if new.is_loading:
            return
        self.save(new.to_cart())

    def attach(self, store: CartStore):
        """Save after every change of the store; returns the unsubscribe handle"""
        return store.subscribe(self.on_change)

    def _take_pending(self) -> Optional[dict[str, Any]]:
        payload, self._pending = self._pending, None
        return payload

    def _write(self, payload: Optional[dict[str, Any]]) -> None:
        if payload is None:
            return
        try:
            self.storage.set(self.key, payload)
        except Exception as e:
            log_error(
                CartError.of(ErrorCode.PERSISTENCE_WRITE_FAILED, f"Failed to save cart: {e}"),
                {"key": self.key},
            )

    async def _drain(self) -> None:
        while self._pending is not None:
            await asyncio.to_thread(self._write, self._take_pending())

    async def flush(self) -> None:
        """Wait until every queued write has been attempted"""
        while self._writer is not None and not self._writer.done():
            await self._writer

    async def clear(self) -> None:
        """Remove the saved cart"""
        self._pending = None
        await self.flush()
        try:
            await asyncio.to_thread(self.storage.remove, self.key)
        except Exception as e:
            log_error(handle_error(e), {"key": self.key, "operation": "remove"})
