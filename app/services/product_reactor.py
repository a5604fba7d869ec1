"""
Translate product lifecycle hooks into search-service tasks.

The store never tells us what a product looked like before a change, and
it announces the same change through several, sometimes repeated, hooks.
``ProductEventReactor`` reconstructs old vs. new state from those signals
and keeps at most one pending task per entity and action.
"""
import hashlib
import json
import logging
from typing import Any, Dict, Optional

from app.constants.sync import NO_VARIANTS, TaskAction, TaskTopic
from app.constants.woocommerce import WCProductStatus, WCProductType, WPHook, WPPostType
from app.repositories.task_queue_repository import TaskQueueRepository
from app.schemas.events import (
    PostUpdate,
    PreDelete,
    PreUpdate,
    ProductEvent,
    StatusChanged,
    VariantUpdate,
)
from app.schemas.products import Item, ProductRecord
from app.services.hooks import HookBus
from app.services.item_builder import BrandLookup, build_item, get_parent_product_id
from app.services.woocommerce.records import RecordStore

logger = logging.getLogger(__name__)


def compute_save_fingerprint(product: ProductRecord, item: Optional[Item]) -> str:
    """
    SHA256 identifying one saved state of a product.

    Covers the record and the item built from it, so a change that only
    reaches the item (a renamed brand term, a new attachment URL) counts.
    """
    state = {
        "type": product.type,
        "status": product.status,
        "record": product.model_dump(),
        "item": item.to_payload() if item is not None else None,
    }
    state_str = json.dumps(state, sort_keys=True)
    return hashlib.sha256(state_str.encode("utf-8")).hexdigest()


class ProductEventReactor:
    """Reacts to product hooks by queueing create / update / delete tasks."""

    def __init__(
        self,
        records: RecordStore,
        brands: BrandLookup,
        queue: TaskQueueRepository,
        state
    ):
        """
        Args:
            records: Product / post lookups
            brands: Brand taxonomy lookups
            queue: Outbound task queue
            state: Per-product transient memory (see ``reactor_state``)
        """
        self.records = records
        self.brands = brands
        self.queue = queue
        self.state = state
        self._handlers = {
            "status_changed": self.on_product_status_changed,
            "pre_update": self.before_product_updated,
            "post_update": self.on_product_updated,
            "variant_update": self.on_variant_updated,
            "pre_delete": self.on_variant_deleted,
        }

    def register(self, bus: HookBus) -> None:
        """Subscribe to every product hook on ``bus``; firings carry parsed events."""
        for hook in WPHook.ALL:
            bus.add_action(hook, self.handle)

    def handle(self, event: ProductEvent) -> None:
        self._handlers[event.kind](event)

    def _item(self, product, include_ids: bool = False, is_variant: bool = False):
        return build_item(self.records, self.brands, product, include_ids, is_variant)

    def _add_task(self, action: str, entity_id: int, payload: Dict[str, Any]) -> None:
        self.queue.add_task(TaskTopic.PRODUCTS, action, entity_id, payload)

    def on_product_status_changed(self, event: StatusChanged) -> None:
        post = event.post
        if not post.is_catalog_entity:
            return

        logger.info(
            f"onProductStatusChanged new_status={event.new_status} && "
            f"old_status={event.old_status}"
        )
        entity_id = post.id
        is_product = post.post_type == WPPostType.PRODUCT

        if event.new_status == WCProductStatus.PUBLISH and event.old_status != WCProductStatus.PUBLISH:
            if is_product:
                product = self.records.get_product(entity_id)
                if product is None:
                    logger.debug(f"Product {entity_id} vanished before publish was handled")
                    return
                if product.type != WCProductType.VARIABLE:
                    logger.info(f"Create product product_id={entity_id}")
                    item = self._item(product, include_ids=True)
                    self._add_task(TaskAction.CREATE, entity_id, {"item": item.to_payload()})
            else:
                item = self._item(entity_id, include_ids=True, is_variant=True)
                if item is None:
                    logger.debug(f"Variant {entity_id} or its parent not found, skipping create")
                    return
                logger.info(f"Create variant variant_id={entity_id}")
                self._add_task(TaskAction.CREATE, entity_id, {"item": item.to_payload()})
            return

        if event.old_status == WCProductStatus.PUBLISH and event.new_status != WCProductStatus.PUBLISH:
            if is_product:
                product = self.records.get_product(entity_id)
                if product is None:
                    logger.debug(f"Product {entity_id} vanished before unpublish was handled")
                    return
                if product.type != WCProductType.VARIABLE:
                    logger.info(f"Delete product product_id={entity_id}")
                    self._add_task(
                        TaskAction.DELETE, entity_id,
                        {"productId": entity_id, "variantId": NO_VARIANTS}
                    )
            else:
                self._delete_variant(entity_id)

    def before_product_updated(self, event: PreUpdate) -> None:
        post = self.records.get_post(event.id)
        if post is None or post.post_type != WPPostType.PRODUCT:
            return
        product = self.records.get_product(event.id)
        if product is None:
            return
        self.state.set_old_type(event.id, product.type)

    def on_product_updated(self, event: PostUpdate) -> None:
        product_id = event.id
        product = self.records.get_product(product_id)
        if product is None:
            logger.debug(f"Product {product_id} not found, update dropped")
            return

        item = self._item(product, include_ids=True)

        # WooCommerce fires this hook twice for a single save
        if not self.state.claim(product_id, compute_save_fingerprint(product, item)):
            logger.debug(f"Repeated update for product {product_id}, skipped")
            return

        if not product.is_published:
            return

        old_type = self.state.get_old_type(product_id) or product.type
        self.state.set_old_type(product_id, product.type)

        if product.is_variable and old_type != WCProductType.VARIABLE:
            # Its variations announce themselves through their own publish transitions
            logger.info(f"Delete product (product type changed to variable) product_id={product_id}")
            self._add_task(
                TaskAction.DELETE, product_id,
                {"productId": product_id, "variantId": NO_VARIANTS}
            )
            return

        if not product.is_variable and old_type == WCProductType.VARIABLE:
            logger.info(f"Create product (product type changed to non-variable) product_id={product_id}")
            self._add_task(TaskAction.CREATE, product_id, {"item": item.to_payload()})
            self._update_children(product)
            return

        if not product.is_variable:
            logger.info(f"Update product product_id={product_id}")
            self.queue.upsert_update_task(
                TaskTopic.PRODUCTS,
                product_id,
                create_patch=lambda: {"item": item.to_payload()},
                update_payload=lambda: {
                    "productId": product_id,
                    "variantId": NO_VARIANTS,
                    "item": item.without_ids().to_payload(),
                }
            )

        self._update_children(product)

    def _update_children(self, product: ProductRecord) -> None:
        for variant_id in product.children:
            self._update_variant(variant_id)

    def on_variant_updated(self, event: VariantUpdate) -> None:
        self._update_variant(event.id)

    def _update_variant(self, variant_id: int) -> None:
        variant = self.records.get_product(variant_id)
        if variant is None or not variant.is_published:
            return

        item = self._item(variant, include_ids=True, is_variant=True)
        if item is None:
            logger.debug(f"Parent of variant {variant_id} not found, update dropped")
            return

        logger.info(f"Update variant variant_id={variant_id}")
        self.queue.upsert_update_task(
            TaskTopic.PRODUCTS,
            variant_id,
            create_patch=lambda: {"item": item.to_payload()},
            update_payload=lambda: {
                "productId": variant.parent_id,
                "variantId": variant_id,
                "item": item.without_ids().to_payload(),
            }
        )

    def on_variant_deleted(self, event: PreDelete) -> None:
        post = self.records.get_post(event.id)
        if post is None or post.post_type != WPPostType.PRODUCT_VARIATION:
            return
        self._delete_variant(event.id)

    def _delete_variant(self, variant_id: int) -> None:
        parent_id = get_parent_product_id(self.records, variant_id)
        if parent_id is None:
            logger.debug(f"Variant {variant_id} not found, delete dropped")
            return
        logger.info(f"Delete variant variant_id={variant_id}")
        self._add_task(
            TaskAction.DELETE, variant_id,
            {"productId": parent_id, "variantId": variant_id}
        )
