"""Pytest configuration and fixtures"""
from datetime import datetime, timezone

import pytest

from storefront_cart.models import Product, ProductCategory
from storefront_cart.reducer import initial_state
from storefront_cart.services import CartService
from storefront_cart.store import CartStore
from storefront_cart.totals import PricingPolicy

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def policy():
    return PricingPolicy(tax_rate=0.18, free_shipping_threshold=1000, flat_shipping_fee=100)


@pytest.fixture
def product_a():
    return Product(
        id="prod-a",
        name="Round Eyeglasses",
        price=1200,
        category=ProductCategory.EYEGLASSES,
        stock_quantity=25,
    )


@pytest.fixture
def product_b():
    return Product(
        id="prod-b",
        name="Aviator Sunglasses",
        price=5000,
        category=ProductCategory.SUNGLASSES,
        stock_quantity=3,
    )


@pytest.fixture
def product_c():
    return Product(
        id="prod-c",
        name="Blue Light Computer Glasses",
        price=2000,
        category=ProductCategory.COMPUTER_GLASSES,
        stock_quantity=10,
    )


@pytest.fixture
def cheap_product():
    return Product(
        id="prod-cheap",
        name="Reading Glasses",
        price=250,
        category=ProductCategory.READING_GLASSES,
        stock_quantity=100,
    )


@pytest.fixture
def empty_state(now):
    return initial_state(now=now)


@pytest.fixture
def store(now, policy):
    return CartStore(initial_state(now=now), policy=policy, clock=lambda: now)


@pytest.fixture
def service(store):
    return CartService(store)
