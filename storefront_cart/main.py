"""
Storefront cart subsystem

Composition root: builds storage, the cart store, the persistence
synchronizer and the revalidation scheduler, and exposes the cart
operations for as long as the subsystem is active.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterable, Optional

from .actions import Load, SetLoading
from .core.config import Settings, get_settings
from .database.products import ProductCatalog
from .database.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from .persistence import CartPersistence
from .reducer import initial_state
from .scheduler import RevalidationScheduler
from .services.cart_service import CartService
from .models.product import Product
from .store import CartStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_storage(settings: Settings) -> KeyValueStorage:
    if settings.storage_dir:
        return JsonFileStorage(settings.storage_dir)
    return MemoryStorage()


@dataclass
class CartSubsystem:
    """Running cart components"""
    service: CartService
    store: CartStore
    persistence: CartPersistence
    scheduler: RevalidationScheduler
    catalog: ProductCatalog


@asynccontextmanager
async def cart_session(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    products: Iterable[Product] = (),
) -> AsyncIterator[CartSubsystem]:
    """Load the saved cart, run revalidation, and tear everything down on exit.

    The catalog is seeded from ``products``; callers read snapshots from it
    to pass to ``add_to_cart``.
    """
    settings = settings or get_settings()
    storage = storage if storage is not None else build_storage(settings)

    catalog = ProductCatalog(products)
    store = CartStore(initial_state(is_loading=True), policy=settings.pricing_policy())
    persistence = CartPersistence(storage, settings.storage_key)
    scheduler = RevalidationScheduler(store, settings.revalidate_interval_seconds)
    unsubscribe = persistence.attach(store)

    try:
        logger.info("Cart subsystem starting up...")
        saved = await persistence.load()
        store.dispatch(Load(cart=saved))
        store.dispatch(SetLoading(is_loading=False))
        scheduler.start()

        yield CartSubsystem(
            service=CartService(store),
            store=store,
            persistence=persistence,
            scheduler=scheduler,
            catalog=catalog,
        )
    finally:
        await scheduler.stop()
        await persistence.flush()
        unsubscribe()
        logger.info("Cart subsystem shut down")
