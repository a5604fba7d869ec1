"""Converters from WooCommerce product records to search-service items."""

import logging
from typing import Optional, Protocol, Union

from app.constants.sync import NO_VARIANTS
from app.schemas.products import Item, ProductRecord
from app.services.woocommerce.records import RecordStore

__logger__ = logging.getLogger(__name__)


class BrandLookup(Protocol):
    def get_first_brand_name(self, entity_id: int) -> Optional[str]: ...


def _to_float(value: Optional[str]) -> float:
    return float(value) if value not in (None, "") else 0.0


def build_item(
    records: RecordStore,
    brands: BrandLookup,
    product_or_id: Union[ProductRecord, int, str],
    include_ids: bool = False,
    is_variant: bool = False
) -> Optional[Item]:
    """
    Build the search-service item for a product or variation.

    Variations take name, description, photo, brand and categories from
    their parent product; price, stock and availability always come from
    the record itself.

    Args:
        records: Record store used to resolve products and images
        brands: Brand taxonomy lookup
        product_or_id: Product ID or an already resolved record
        include_ids: Add ``product_id`` / ``variant_id`` to the item
        is_variant: Treat the record as a variation of its parent

    Returns:
        Item, or None if the record (or a variation's parent) does not exist
    """
    if isinstance(product_or_id, ProductRecord):
        product = product_or_id
    else:
        product = records.get_product(int(product_or_id))
        if product is None:
            __logger__.debug(f"Product {product_or_id} not found, no item built")
            return None

    if is_variant:
        source = records.get_product(product.parent_id)
        if source is None:
            __logger__.debug(f"Parent {product.parent_id} of variant {product.id} not found")
            return None
    else:
        source = product

    # Get photo url
    photo_url = None
    if source.image_id:
        photo_url = records.get_attachment_image_url(source.image_id)
    if not photo_url:
        photo_url = records.get_placeholder_image_url()

    price = _to_float(product.sale_price) if product.sale_price else _to_float(product.regular_price)

    item = {
        "name": source.name,
        "price": price,
        "full_price": _to_float(product.regular_price),
        "link": product.permalink or records.get_permalink(product.id),
        "available": product.is_published,
        "description": source.description,
        "brand": brands.get_first_brand_name(source.id),
        "photo_url": photo_url,
        "stock": product.stock_quantity,
        "category_ids": [str(category_id) for category_id in source.category_ids],
    }

    if include_ids:
        if is_variant:
            item["product_id"] = str(product.parent_id)
            item["variant_id"] = str(product.id)
        else:
            item["product_id"] = str(product.id)
            item["variant_id"] = NO_VARIANTS

    return Item(**item)


def get_parent_product_id(records: RecordStore, product_id: int) -> Optional[int]:
    """Return the parent ID of a record, or None if it does not exist."""
    product = records.get_product(product_id)
    if product is None:
        return None
    return product.parent_id
