"""Public cart operations"""

import logging
from typing import Optional

from ..actions import Add, Clear, Remove, Revalidate, UpdateQuantity
from ..core.errors import ErrorCode
from ..models.cart import Cart, CartError, CartItem, CartState
from ..models.product import Product
from ..store import CartStore

logger = logging.getLogger(__name__)


class CartService:
    """
    Operations the storefront calls on the cart.

    Mutations update the in-memory cart immediately and return the
    resulting state; stock problems are reported on ``state.error``
    rather than raised. Persistence happens behind the store.
    """

    def __init__(self, store: CartStore):
        self.store = store

    # Queries

    @property
    def state(self) -> CartState:
        return self.store.state

    @property
    def cart(self) -> Cart:
        return self.store.state.to_cart()

    @property
    def is_loading(self) -> bool:
        return self.store.state.is_loading

    @property
    def error(self) -> Optional[CartError]:
        return self.store.state.error

    def get_item(self, product_id: str) -> Optional[CartItem]:
        return self.store.state.find_item(product_id)

    def is_in_cart(self, product_id: str) -> bool:
        return self.get_item(product_id) is not None

    def get_cart_item_quantity(self, product_id: str) -> int:
        item = self.get_item(product_id)
        return item.quantity if item else 0

    def get_total_items(self) -> int:
        return self.store.state.item_count

    def get_subtotal(self) -> int:
        return self.store.state.subtotal

    def get_tax(self) -> int:
        return self.store.state.tax

    def get_shipping(self) -> int:
        return self.store.state.shipping

    def get_discount(self) -> int:
        return self.store.state.discount

    def get_total(self) -> int:
        return self.store.state.total

    # Commands

    def add_to_cart(self, product: Product, quantity: int = 1) -> CartState:
        """Add a product snapshot, merging with an existing line.

        A non-positive quantity never reaches the store: the current state
        is returned with an INVALID_QUANTITY error attached and nothing
        is committed or saved.
        """
        if quantity <= 0:
            logger.info(f"Rejected add of {product.id}: invalid quantity {quantity}")
            return self.store.state.model_copy(
                update={"error": CartError.of(ErrorCode.INVALID_QUANTITY)}
            )
        return self.store.dispatch(Add(product=product, quantity=quantity))

    def remove_from_cart(self, product_id: str) -> CartState:
        return self.store.dispatch(Remove(product_id=product_id))

    def update_quantity(self, product_id: str, quantity: int) -> CartState:
        """Set a line's quantity; zero or less removes the line"""
        return self.store.dispatch(UpdateQuantity(product_id=product_id, quantity=quantity))

    def clear_cart(self) -> CartState:
        return self.store.dispatch(Clear())

    def validate_cart(self) -> bool:
        """Drop unavailable lines now; True when the cart has no error afterwards"""
        return self.store.dispatch(Revalidate()).error is None
