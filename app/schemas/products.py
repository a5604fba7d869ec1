from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.constants.woocommerce import WCProductStatus, WCProductType, WPPostType


class ProductRecord(BaseModel):
    """A WooCommerce product or variation as the store currently holds it."""

    id: int
    parent_id: int = 0
    type: str = WCProductType.SIMPLE
    status: str = WCProductStatus.DRAFT
    name: str = ""
    description: str = ""
    regular_price: Optional[str] = None
    sale_price: Optional[str] = None
    image_id: Optional[int] = None
    stock_quantity: Optional[int] = None
    category_ids: List[int] = Field(default_factory=list)
    children: List[int] = Field(default_factory=list)
    permalink: Optional[str] = None
    date_modified: Optional[str] = None

    @property
    def is_published(self) -> bool:
        return self.status == WCProductStatus.PUBLISH

    @property
    def is_variable(self) -> bool:
        return self.type == WCProductType.VARIABLE

    @property
    def is_variation(self) -> bool:
        return self.type == WCProductType.VARIATION

    @classmethod
    def from_woocommerce(cls, wc_product: Dict[str, Any]) -> "ProductRecord":
        """Build a record from a ``GET products/<id>`` REST response."""
        # Products expose an ``images`` list, variations a single ``image``
        image = wc_product.get("image")
        if not image and wc_product.get("images"):
            image = wc_product["images"][0]

        return cls(
            id=wc_product["id"],
            parent_id=wc_product.get("parent_id") or 0,
            type=wc_product.get("type") or WCProductType.SIMPLE,
            status=wc_product.get("status") or WCProductStatus.DRAFT,
            name=wc_product.get("name") or "",
            description=wc_product.get("description") or "",
            regular_price=wc_product.get("regular_price") or None,
            sale_price=wc_product.get("sale_price") or None,
            image_id=(image or {}).get("id") or None,
            stock_quantity=wc_product.get("stock_quantity"),
            category_ids=[c["id"] for c in wc_product.get("categories") or []],
            children=list(wc_product.get("variations") or []),
            permalink=wc_product.get("permalink") or None,
            date_modified=wc_product.get("date_modified_gmt") or None,
        )


class PostRecord(BaseModel):
    """The WordPress post behind a catalog entity."""

    # Accepts both our own field names and raw ``WP_Post`` properties
    id: int = Field(validation_alias=AliasChoices("id", "ID"))
    post_type: str
    status: str = Field(
        default=WCProductStatus.DRAFT,
        validation_alias=AliasChoices("status", "post_status"),
    )

    @property
    def is_catalog_entity(self) -> bool:
        return self.post_type in (WPPostType.PRODUCT, WPPostType.PRODUCT_VARIATION)


class Item(BaseModel):
    """Normalized product payload sent to the search service."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: float
    full_price: float
    link: Optional[str] = None
    available: bool
    description: str = ""
    brand: Optional[str] = None
    photo_url: str
    stock: Optional[int] = None
    category_ids: List[str] = Field(default_factory=list)
    product_id: Optional[str] = None
    variant_id: Optional[str] = None

    def without_ids(self) -> "Item":
        return self.model_copy(update={"product_id": None, "variant_id": None})

    def to_payload(self) -> Dict[str, Any]:
        """
        Render the item as shipped in a task payload.

        ``stock`` and the identifiers are left out entirely when unset;
        ``brand`` is always present, possibly null.
        """
        payload = self.model_dump()
        if self.stock is None:
            payload.pop("stock")
        if self.product_id is None:
            payload.pop("product_id")
        if self.variant_id is None:
            payload.pop("variant_id")
        return payload
