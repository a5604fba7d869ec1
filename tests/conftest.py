"""
Shared fixtures: an in-memory database holding both the task queue and the
WordPress term tables, and an in-memory record store standing in for the
WooCommerce REST API.
"""
from typing import Dict, Optional

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.constants.woocommerce import WCProductStatus, WCProductType, WPPostType, WPTaxonomy
from app.core.exceptions import RecordStoreError
from app.db.base import Base
from app.models import QueueTask  # noqa: F401
from app.models.wordpress import get_term_tables, wp_metadata
from app.repositories import BrandRepository, TaskQueueRepository
from app.schemas.products import PostRecord, ProductRecord
from app.services.product_reactor import ProductEventReactor
from app.services.reactor_state import MemoryReactorState

PLACEHOLDER_URL = "https://shop.example.com/wp-content/uploads/woocommerce-placeholder.png"


class FakeRecordStore:
    """In-memory stand-in for ``WooCommerceRecordStore``."""

    def __init__(self):
        self.products: Dict[int, ProductRecord] = {}
        self.images: Dict[int, str] = {}
        self.fail = False

    def add(self, **fields) -> ProductRecord:
        product = ProductRecord(**fields)
        self.products[product.id] = product
        return product

    def change(self, product_id: int, **fields) -> ProductRecord:
        product = self.products[product_id].model_copy(update=fields)
        self.products[product_id] = product
        return product

    def remove(self, product_id: int) -> None:
        self.products.pop(product_id, None)

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        if self.fail:
            raise RecordStoreError("WooCommerce API error (503): unavailable", status_code=503)
        return self.products.get(int(product_id))

    def get_post(self, post_id: int) -> Optional[PostRecord]:
        product = self.get_product(post_id)
        if product is None:
            return None
        post_type = (
            WPPostType.PRODUCT_VARIATION
            if product.type == WCProductType.VARIATION
            else WPPostType.PRODUCT
        )
        return PostRecord(id=product.id, post_type=post_type, status=product.status)

    def get_permalink(self, product_id: int) -> Optional[str]:
        return f"https://shop.example.com/?p={product_id}"

    def get_attachment_image_url(self, image_id: int) -> Optional[str]:
        return self.images.get(image_id)

    def get_placeholder_image_url(self) -> str:
        return PLACEHOLDER_URL


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    get_term_tables("wp_")
    Base.metadata.create_all(bind=engine)
    wp_metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_brand(db):
    """Attach a taxonomy term to a product: ``add_brand(product_id, name)``."""
    tables = get_term_tables("wp_")
    counter = {"next": 1}

    def _add(object_id: int, name: str, taxonomy: str = WPTaxonomy.PRODUCT_BRAND):
        term_id = counter["next"]
        counter["next"] += 1
        db.execute(insert(tables.terms).values(term_id=term_id, name=name, slug=name.lower()))
        db.execute(insert(tables.term_taxonomy).values(
            term_taxonomy_id=term_id, term_id=term_id, taxonomy=taxonomy
        ))
        db.execute(insert(tables.term_relationships).values(
            object_id=object_id, term_taxonomy_id=term_id
        ))
        db.commit()

    return _add


@pytest.fixture
def records() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def brands(db) -> BrandRepository:
    return BrandRepository(db, table_prefix="wp_")


@pytest.fixture
def queue(db) -> TaskQueueRepository:
    return TaskQueueRepository(db)


@pytest.fixture
def state() -> MemoryReactorState:
    return MemoryReactorState(ttl_seconds=300, max_entries=100)


@pytest.fixture
def reactor(records, brands, queue, state) -> ProductEventReactor:
    return ProductEventReactor(records=records, brands=brands, queue=queue, state=state)


@pytest.fixture
def simple_product(records) -> ProductRecord:
    return records.add(
        id=10,
        type=WCProductType.SIMPLE,
        status=WCProductStatus.PUBLISH,
        name="Trail Runner",
        description="Lightweight trail shoe",
        regular_price="120.00",
        sale_price="99.50",
        stock_quantity=None,
        category_ids=[15, 7],
    )


@pytest.fixture
def variable_product(records) -> ProductRecord:
    """A published variable product with two published variations (21, 22)."""
    parent = records.add(
        id=20,
        type=WCProductType.VARIABLE,
        status=WCProductStatus.PUBLISH,
        name="Wool Sweater",
        description="Merino wool",
        image_id=500,
        category_ids=[3, 9, 3],
        children=[21, 22],
    )
    records.images[500] = "https://shop.example.com/wp-content/uploads/sweater.jpg"
    records.add(
        id=21, parent_id=20, type=WCProductType.VARIATION, status=WCProductStatus.PUBLISH,
        name="Wool Sweater - S", regular_price="80", stock_quantity=4,
    )
    records.add(
        id=22, parent_id=20, type=WCProductType.VARIATION, status=WCProductStatus.PUBLISH,
        name="Wool Sweater - M", regular_price="80", sale_price="70", stock_quantity=0,
    )
    return parent
