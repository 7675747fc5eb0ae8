"""Periodic stock revalidation"""

import asyncio
import contextlib
import logging
from typing import Optional

from .actions import Revalidate
from .models.cart import CartState
from .store import CartStore

logger = logging.getLogger(__name__)


class RevalidationScheduler:
    """Dispatches Revalidate on a fixed interval until stopped"""

    def __init__(self, store: CartStore, interval_seconds: float = 60.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the recurring task on the running event loop"""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="cart-revalidation"
        )
        logger.info(f"Cart revalidation every {self.interval_seconds}s")

    def run_once(self) -> CartState:
        before = self.store.state
        after = self.store.dispatch(Revalidate())
        if after is not before:
            logger.warning(f"Revalidation removed {len(before.items) - len(after.items)} cart lines")
        return after

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.run_once()
            except Exception:
                logger.exception("Cart revalidation failed")

    async def stop(self) -> None:
        """Cancel the recurring task; safe to call when already stopped"""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Cart revalidation stopped")
