# Cart models

from .product import Product, ProductCategory
from .cart import Cart, CartItem, CartState, CartError

__all__ = [
    "Product",
    "ProductCategory",
    "Cart",
    "CartItem",
    "CartState",
    "CartError",
]
