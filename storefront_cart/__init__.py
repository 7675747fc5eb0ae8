"""Client-held shopping cart state manager"""

from .actions import Action, Add, Clear, Load, Remove, Revalidate, SetError, SetLoading, UpdateQuantity
from .models import Cart, CartError, CartItem, CartState, Product, ProductCategory
from .reducer import initial_state, transition
from .services.cart_service import CartService
from .store import CartStore
from .totals import DEFAULT_POLICY, PricingPolicy, Totals, compute_totals

__version__ = "1.0.0"

__all__ = [
    "Action",
    "Add",
    "Clear",
    "Load",
    "Remove",
    "Revalidate",
    "SetError",
    "SetLoading",
    "UpdateQuantity",
    "Cart",
    "CartError",
    "CartItem",
    "CartState",
    "Product",
    "ProductCategory",
    "initial_state",
    "transition",
    "CartService",
    "CartStore",
    "DEFAULT_POLICY",
    "PricingPolicy",
    "Totals",
    "compute_totals",
]
