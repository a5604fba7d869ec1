"""Dependencies wiring the reactor for the hook endpoints."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db, get_wp_db
from app.repositories import BrandRepository, TaskQueueRepository
from app.services.hooks import HookBus
from app.services.product_reactor import ProductEventReactor
from app.services.reactor_state import create_reactor_state
from app.services.woocommerce.records import WooCommerceRecordStore


@lru_cache()
def get_reactor_state():
    # Process-wide: the hooks of one save arrive as separate requests
    return create_reactor_state()


@lru_cache()
def get_record_store():
    return WooCommerceRecordStore()


def get_hook_bus(
    db: Session = Depends(get_db),
    wp_db: Session = Depends(get_wp_db),
    records=Depends(get_record_store),
    state=Depends(get_reactor_state),
) -> HookBus:
    bus = HookBus()
    reactor = ProductEventReactor(
        records=records,
        brands=BrandRepository(wp_db),
        queue=TaskQueueRepository(db),
        state=state,
    )
    reactor.register(bus)
    return bus
