"""Actions accepted by the cart transition function"""

from dataclasses import dataclass
from typing import Optional, Union

from .models.cart import Cart, CartError
from .models.product import Product


@dataclass(frozen=True)
class Load:
    """Replace the cart wholesale with a saved cart"""
    cart: Cart


@dataclass(frozen=True)
class Add:
    product: Product
    quantity: int = 1


@dataclass(frozen=True)
class Remove:
    product_id: str


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Revalidate:
    """Drop lines whose product snapshot no longer covers the quantity"""
    pass


@dataclass(frozen=True)
class SetLoading:
    is_loading: bool


@dataclass(frozen=True)
class SetError:
    error: Optional[CartError]


Action = Union[Load, Add, Remove, UpdateQuantity, Clear, Revalidate, SetLoading, SetError]
