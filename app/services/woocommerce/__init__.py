"""WooCommerce services package."""

from app.services.woocommerce.client import wc_get
from app.services.woocommerce.records import RecordStore, WooCommerceRecordStore

__all__ = [
    "wc_get",
    "RecordStore",
    "WooCommerceRecordStore",
]
