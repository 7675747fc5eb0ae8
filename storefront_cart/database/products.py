"""In-memory product catalog"""

from typing import Iterable, Optional

from ..models.product import Product


class ProductCatalog:
    """Product repository owned by whoever composes the cart subsystem.

    Stored products are replaced on stock changes, never mutated, so a
    snapshot already embedded in a cart stays as it was until the cart
    is revalidated.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self.products: dict[str, Product] = {p.id: p for p in products}

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def check_availability(self, product_id: str, quantity: int = 1) -> bool:
        """Whether the product can currently cover the quantity"""
        product = self.products.get(product_id)
        if not product:
            return False
        return product.in_stock and product.stock_quantity >= quantity

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """
        Update product stock.

        Args:
            product_id: Product to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.stock_quantity + quantity_change
        if new_quantity < 0:
            return False

        self.products[product_id] = product.model_copy(
            update={"stock_quantity": new_quantity, "in_stock": new_quantity > 0}
        )
        return True
