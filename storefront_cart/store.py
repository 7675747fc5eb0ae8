"""Single owner of the current cart state"""

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from .actions import Action
from .models.cart import CartState, utcnow
from .reducer import initial_state, transition
from .totals import DEFAULT_POLICY, PricingPolicy

logger = logging.getLogger(__name__)

Listener = Callable[[CartState, CartState], None]


class CartStore:
    """Holds the CartState and funnels every change through ``transition``.

    Dispatch reads the whole old state, computes the new one and publishes
    it in one step under a lock, then notifies subscribers in dispatch
    order. Subscribers are not called when an action changes nothing.
    """

    def __init__(
        self,
        state: Optional[CartState] = None,
        policy: PricingPolicy = DEFAULT_POLICY,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._state = state if state is not None else initial_state()
        self.policy = policy
        self.clock = clock
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CartState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> CartState:
        with self._lock:
            old = self._state
            new = transition(old, action, self.policy, self.clock())
            if new is old:
                return old
            self._state = new

            for listener in list(self._listeners):
                try:
                    listener(old, new)
                except Exception:
                    logger.exception(f"Cart listener {listener!r} failed")

        return new
