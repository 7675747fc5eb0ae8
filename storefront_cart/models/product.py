"""Product snapshot models"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class ProductCategory(str, Enum):
    EYEGLASSES = "eyeglasses"
    SUNGLASSES = "sunglasses"
    COMPUTER_GLASSES = "computer-glasses"
    KIDS_GLASSES = "kids-glasses"
    READING_GLASSES = "reading-glasses"
    NEW_ARRIVALS = "new-arrivals"
    PRESCRIPTION_SUNGLASSES = "prescription-sunglasses"


class Product(BaseModel):
    """Catalog product as seen by the cart.

    Prices are integers in currency minor units. A cart line embeds the
    product by value, so a snapshot never changes after it is taken.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str = ""
    description: str = ""
    price: int = Field(ge=0)
    category: Optional[ProductCategory] = None
    sku: Optional[str] = None
    image_url: Optional[str] = None
    in_stock: bool = True
    stock_quantity: int = Field(ge=0, default=0)
