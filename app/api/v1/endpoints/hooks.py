"""API endpoints receiving WordPress product hooks forwarded by the store."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_hook_bus
from app.constants.woocommerce import WPHook
from app.core.exceptions import MalformedHookError, RecordStoreError
from app.db.session import get_db
from app.repositories import TaskQueueRepository
from app.schemas.events import event_from_hook
from app.schemas.task_schemas import HookRequest, HookResponse
from app.services.hooks import HookBus

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
def hooks_health_check():
    """Health check for the hook receiver."""
    return {
        "status": "ok",
        "hooks": list(WPHook.ALL),
        "message": "Hook receiver is ready"
    }


@router.post("/{hook_name}", response_model=HookResponse)
def receive_hook(
    hook_name: str,
    request: HookRequest,
    bus: HookBus = Depends(get_hook_bus),
    db: Session = Depends(get_db)
):
    """
    Receive one firing of a WordPress product hook.

    Args:
        hook_name: WordPress action name (e.g., transition_post_status)
        request: Positional hook arguments
        bus: Hook bus with the product reactor subscribed
        db: Database session

    Returns:
        Acknowledgment with the number of tasks waiting for delivery
    """
    if hook_name not in WPHook.ALL:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown hook {hook_name}"
        )

    try:
        event = event_from_hook(hook_name, request.args)
    except MalformedHookError as e:
        logger.warning(f"Malformed {hook_name} firing: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )

    logger.info(f"=== HOOK RECEIVED === {hook_name} ({event.kind})")

    try:
        bus.do_action(hook_name, event)
    except RecordStoreError as e:
        logger.error(f"Record store failure handling {hook_name}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"WooCommerce lookup failed: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error handling hook {hook_name}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error handling hook: {str(e)}"
        )

    return HookResponse(
        hook=hook_name,
        event=event.kind,
        tasks_pending=TaskQueueRepository(db).count_pending()
    )
