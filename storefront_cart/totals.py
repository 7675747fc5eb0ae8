"""Cart totals calculation.

All amounts are integers in currency minor units. Tax is rounded half
away from zero, so ``total == subtotal + tax + shipping - discount``
holds exactly for every cart.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple


@dataclass(frozen=True)
class PricingPolicy:
    """Tax and shipping constants applied to a cart"""
    tax_rate: float = 0.18
    free_shipping_threshold: int = 1000
    flat_shipping_fee: int = 100


DEFAULT_POLICY = PricingPolicy()


class Totals(NamedTuple):
    subtotal: int
    tax: int
    shipping: int
    discount: int
    total: int
    item_count: int


ZERO_TOTALS = Totals(0, 0, 0, 0, 0, 0)


def round_half_away(value: Decimal) -> int:
    """Round to a whole minor unit, halves away from zero"""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_tax(subtotal: int, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    # str() keeps 0.18 from turning into 0.179999...
    return round_half_away(Decimal(subtotal) * Decimal(str(policy.tax_rate)))


def compute_shipping(subtotal: int, item_count: int, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    if item_count == 0 or subtotal >= policy.free_shipping_threshold:
        return 0
    return policy.flat_shipping_fee


def compute_totals(items: Iterable, policy: PricingPolicy = DEFAULT_POLICY) -> Totals:
    """Derive every monetary total from the cart lines.

    Args:
        items: Cart lines, each with ``product.price`` and ``quantity``
        policy: Tax rate and shipping rules

    Shipping is the flat fee below the free-shipping threshold, except
    for an empty cart, which is charged nothing. That keeps removing the
    last line and clearing the cart on identical totals.

    Returns:
        Totals for the given lines; an empty cart is all zeros
    """
    subtotal = 0
    item_count = 0
    for item in items:
        subtotal += item.product.price * item.quantity
        item_count += item.quantity

    tax = compute_tax(subtotal, policy)
    shipping = compute_shipping(subtotal, item_count, policy)
    # Coupons are not applied by the cart core.
    discount = 0
    total = max(subtotal + tax + shipping - discount, 0)

    return Totals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        discount=discount,
        total=total,
        item_count=item_count,
    )
