"""
Product lifecycle events.

Each WordPress/WooCommerce hook the reactor listens to is reified as one
event type, so the reactor can be driven without a live store.
"""
from typing import Annotated, Any, Dict, Literal, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from app.constants.woocommerce import WPHook
from app.core.exceptions import MalformedHookError, UnknownHookError
from app.schemas.products import PostRecord


class StatusChanged(BaseModel):
    kind: Literal["status_changed"] = "status_changed"
    new_status: str
    old_status: str
    post: PostRecord


class PreUpdate(BaseModel):
    kind: Literal["pre_update"] = "pre_update"
    id: int
    data: Dict[str, Any] = Field(default_factory=dict)


class PostUpdate(BaseModel):
    kind: Literal["post_update"] = "post_update"
    id: int


class VariantUpdate(BaseModel):
    kind: Literal["variant_update"] = "variant_update"
    id: int


class PreDelete(BaseModel):
    kind: Literal["pre_delete"] = "pre_delete"
    id: int


ProductEvent = Annotated[
    Union[StatusChanged, PreUpdate, PostUpdate, VariantUpdate, PreDelete],
    Field(discriminator="kind"),
]


def event_from_hook(hook: str, args: Sequence[Any]) -> ProductEvent:
    """
    Convert the positional arguments of a hook firing into an event.

    Args:
        hook: WordPress action name (see ``WPHook``)
        args: Arguments exactly as WordPress passed them

    Raises:
        UnknownHookError: if ``hook`` is not one of the product hooks
        MalformedHookError: if ``args`` do not match the hook's signature
    """
    try:
        if hook == WPHook.TRANSITION_POST_STATUS:
            new_status, old_status, post = args[:3]
            return StatusChanged(new_status=new_status, old_status=old_status, post=post)
        if hook == WPHook.PRE_POST_UPDATE:
            data = args[1] if len(args) > 1 and args[1] is not None else {}
            return PreUpdate(id=args[0], data=data)
        if hook == WPHook.UPDATE_PRODUCT:
            return PostUpdate(id=args[0])
        if hook == WPHook.UPDATE_PRODUCT_VARIATION:
            return VariantUpdate(id=args[0])
        if hook == WPHook.BEFORE_DELETE_POST:
            return PreDelete(id=args[0])
    except (IndexError, ValueError, ValidationError) as e:
        raise MalformedHookError(f"Invalid arguments for {hook}: {e}") from e

    raise UnknownHookError(f"Unknown hook: {hook}")
