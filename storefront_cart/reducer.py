"""Pure cart transition function.

``transition(state, action)`` always returns a complete, consistent
CartState. Rejected operations return the old items untouched with the
error set; they never partially apply. Revalidate returns the very same
state object when nothing is invalid.
"""

import logging
from datetime import datetime
from typing import Optional

from .actions import (
    Action,
    Add,
    Clear,
    Load,
    Remove,
    Revalidate,
    SetError,
    SetLoading,
    UpdateQuantity,
)
from .core.errors import ErrorCode
from .models.cart import CartError, CartItem, CartState, utcnow
from .totals import DEFAULT_POLICY, PricingPolicy, ZERO_TOTALS, compute_totals

logger = logging.getLogger(__name__)


def initial_state(is_loading: bool = False, now: Optional[datetime] = None) -> CartState:
    """Empty cart with zero totals"""
    return CartState(updated_at=now or utcnow(), is_loading=is_loading)


def _with_items(
    state: CartState,
    items: list[CartItem],
    policy: PricingPolicy,
    now: datetime,
    error: Optional[CartError] = None,
) -> CartState:
    totals = compute_totals(items, policy)
    return state.model_copy(
        update={
            "items": items,
            **totals._asdict(),
            "updated_at": now,
            "error": error,
        }
    )


def _reject(state: CartState, code: ErrorCode, message: Optional[str] = None) -> CartState:
    return state.model_copy(update={"error": CartError.of(code, message)})


def _add(state: CartState, action: Add, policy: PricingPolicy, now: datetime) -> CartState:
    product = action.product

    if not product.in_stock or product.stock_quantity < action.quantity:
        logger.info(
            f"Rejected add of {action.quantity}x {product.id}: "
            f"in_stock={product.in_stock}, available={product.stock_quantity}"
        )
        return _reject(state, ErrorCode.OUT_OF_STOCK)

    existing = state.find_item(product.id)

    if existing:
        new_quantity = existing.quantity + action.quantity
        if new_quantity > product.stock_quantity:
            logger.info(
                f"Rejected add of {product.id}: {new_quantity} exceeds stock {product.stock_quantity}"
            )
            return _reject(state, ErrorCode.OUT_OF_STOCK, "Not enough stock available")

        items = [
            item.model_copy(update={"quantity": new_quantity}) if item is existing else item
            for item in state.items
        ]
    else:
        items = [
            *state.items,
            CartItem(
                product=product,
                quantity=action.quantity,
                added_at=now,
                max_quantity=product.stock_quantity,
            ),
        ]

    return _with_items(state, items, policy, now)


def _remove(state: CartState, product_id: str, policy: PricingPolicy, now: datetime) -> CartState:
    items = [item for item in state.items if item.product.id != product_id]
    return _with_items(state, items, policy, now)


def _update_quantity(
    state: CartState, action: UpdateQuantity, policy: PricingPolicy, now: datetime
) -> CartState:
    if action.quantity <= 0:
        return _remove(state, action.product_id, policy, now)

    existing = state.find_item(action.product_id)
    if existing and action.quantity > existing.product.stock_quantity:
        logger.info(
            f"Rejected quantity {action.quantity} for {action.product_id}: "
            f"available={existing.product.stock_quantity}"
        )
        return _reject(state, ErrorCode.OUT_OF_STOCK, "Not enough stock available")

    items = [
        item.model_copy(update={"quantity": action.quantity}) if item is existing else item
        for item in state.items
    ]
    return _with_items(state, items, policy, now)


def _clear(state: CartState, now: datetime) -> CartState:
    return state.model_copy(
        update={"items": [], **ZERO_TOTALS._asdict(), "updated_at": now, "error": None}
    )


def _load(state: CartState, action: Load, policy: PricingPolicy) -> CartState:
    saved = action.cart
    totals = compute_totals(saved.items, policy)
    return state.model_copy(
        update={
            "items": list(saved.items),
            **totals._asdict(),
            "updated_at": saved.updated_at,
            "error": None,
        }
    )


def _is_available(item: CartItem) -> bool:
    return item.product.in_stock and item.quantity <= item.product.stock_quantity


def _revalidate(state: CartState, policy: PricingPolicy, now: datetime) -> CartState:
    valid = [item for item in state.items if _is_available(item)]

    if len(valid) == len(state.items):
        return state

    dropped = [item.product.id for item in state.items if not _is_available(item)]
    logger.warning(f"Revalidation dropped unavailable items: {', '.join(dropped)}")
    return _with_items(
        state,
        valid,
        policy,
        now,
        error=CartError.of(ErrorCode.SOME_ITEMS_UNAVAILABLE),
    )


def transition(
    state: CartState,
    action: Action,
    policy: PricingPolicy = DEFAULT_POLICY,
    now: Optional[datetime] = None,
) -> CartState:
    """Apply one action to the cart state.

    Args:
        state: Current state, never modified
        action: Action to apply
        policy: Pricing rules used to recompute totals
        now: Timestamp for updated_at/added_at; defaults to current UTC time

    Returns:
        The new state, or ``state`` itself when the action changes nothing
    """
    now = now or utcnow()

    if isinstance(action, Add):
        return _add(state, action, policy, now)
    if isinstance(action, Remove):
        return _remove(state, action.product_id, policy, now)
    if isinstance(action, UpdateQuantity):
        return _update_quantity(state, action, policy, now)
    if isinstance(action, Clear):
        return _clear(state, now)
    if isinstance(action, Revalidate):
        return _revalidate(state, policy, now)
    if isinstance(action, Load):
        return _load(state, action, policy)
    if isinstance(action, SetLoading):
        return state.model_copy(update={"is_loading": action.is_loading})
    if isinstance(action, SetError):
        return state.model_copy(update={"error": action.error, "is_loading": False})

    raise TypeError(f"Unknown cart action: {action!r}")
