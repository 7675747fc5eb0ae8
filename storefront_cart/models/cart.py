"""Cart models"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import ErrorCode, ERROR_MESSAGES
from .product import Product


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartError(BaseModel):
    """Advisory error carried on the cart state, never raised"""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    timestamp: datetime = Field(default_factory=utcnow)

    @classmethod
    def of(cls, code: ErrorCode, message: Optional[str] = None) -> "CartError":
        return cls(code=code, message=message or ERROR_MESSAGES[code])


class CartItem(BaseModel):
    """One product line in the cart"""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(gt=0)
    added_at: datetime = Field(default_factory=utcnow)
    # Stock ceiling when the line was created; only a hint.
    max_quantity: int = Field(ge=0, default=0)

    @property
    def line_total(self) -> int:
        return self.product.price * self.quantity


class Cart(BaseModel):
    """Persisted cart: items plus derived totals"""

    model_config = ConfigDict(frozen=True)

    items: list[CartItem] = Field(default_factory=list)
    subtotal: int = Field(ge=0, default=0)
    tax: int = Field(ge=0, default=0)
    shipping: int = Field(ge=0, default=0)
    discount: int = Field(ge=0, default=0)
    total: int = Field(ge=0, default=0)
    item_count: int = Field(ge=0, default=0)
    updated_at: datetime = Field(default_factory=utcnow)

    def find_item(self, product_id: str) -> Optional[CartItem]:
        return next(
            (item for item in self.items if item.product.id == product_id),
            None,
        )


class CartState(Cart):
    """In-process cart state; the transient fields are never persisted"""

    is_loading: bool = False
    error: Optional[CartError] = None

    def to_cart(self) -> Cart:
        """Persisted subset, without is_loading and error"""
        return Cart(
            items=self.items,
            subtotal=self.subtotal,
            tax=self.tax,
            shipping=self.shipping,
            discount=self.discount,
            total=self.total,
            item_count=self.item_count,
            updated_at=self.updated_at,
        )
