"""Cart subsystem configuration"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..totals import PricingPolicy


class Settings(BaseSettings):
    """Settings loaded from CART_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pricing policy (minor units)
    tax_rate: float = Field(default=0.18, ge=0)
    free_shipping_threshold: int = Field(default=1000, ge=0)
    flat_shipping_fee: int = Field(default=100, ge=0)

    # Revalidation
    revalidate_interval_seconds: float = Field(default=60.0, gt=0)

    # Storage
    storage_key: str = "storefront-cart"
    storage_dir: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    def pricing_policy(self) -> PricingPolicy:
        """Policy consumed by the totals calculator"""
        return PricingPolicy(
            tax_rate=self.tax_rate,
            free_shipping_threshold=self.free_shipping_threshold,
            flat_shipping_fee=self.flat_shipping_fee,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
