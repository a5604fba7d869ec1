"""Product / post lookups against the WooCommerce REST API."""

import logging
from typing import Optional, Protocol

from woocommerce import API

from app.constants.woocommerce import WCProductType, WPPostType
from app.core.config import settings
from app.factories.woocommerce_factory import WooCommerceClientFactory
from app.schemas.products import PostRecord, ProductRecord
from app.services.woocommerce.client import wc_get

__logger__ = logging.getLogger(__name__)


class RecordStore(Protocol):
    """What the item builder and reactor need from the store."""

    def get_product(self, product_id: int) -> Optional[ProductRecord]: ...

    def get_post(self, post_id: int) -> Optional[PostRecord]: ...

    def get_permalink(self, product_id: int) -> Optional[str]: ...

    def get_attachment_image_url(self, image_id: int) -> Optional[str]: ...

    def get_placeholder_image_url(self) -> str: ...


class WooCommerceRecordStore:
    """
    Record store backed by the WooCommerce REST API.

    ``products/<id>`` resolves variations as well as products, so a single
    endpoint serves both. Missing records come back as None; any other
    API failure raises ``RecordStoreError``.
    """

    def __init__(self, wcapi: API = None, media_api: API = None):
        self.wcapi = wcapi or WooCommerceClientFactory.from_settings()
        self.media_api = media_api or WooCommerceClientFactory.media_from_settings()

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        data = wc_get(f"products/{int(product_id)}", wcapi=self.wcapi)
        if not data:
            return None
        return ProductRecord.from_woocommerce(data)

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
        product = self.get_product(product_id)
        return product.permalink if product else None

    def get_attachment_image_url(self, image_id: int) -> Optional[str]:
        data = wc_get(f"media/{int(image_id)}", wcapi=self.media_api)
        if not data:
            __logger__.debug(f"Attachment {image_id} not found")
            return None
        return data.get("source_url") or None

    def get_placeholder_image_url(self) -> str:
        return settings.placeholder_image_url
