"""Pydantic schemas for the task queue and hook receiver endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskResponse(BaseModel):
    """Schema for a queued task."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    topic: str
    action: str
    entity_id: int
    payload: Dict[str, Any]
    status: str
    retry_count: int
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    executed_at: Optional[datetime] = None


class TaskQueueStats(BaseModel):
    """Counts of queued tasks per status and action."""
    total: int
    pending: int
    sent: int
    failed: int
    actions: Dict[str, int] = Field(default_factory=dict)


class HookRequest(BaseModel):
    """A WordPress hook firing forwarded by the store."""
    args: List[Any] = Field(default_factory=list,
                            description="Positional hook arguments as WordPress passed them")


class HookResponse(BaseModel):
    status: str = "ok"
    hook: str
    event: str
    tasks_pending: int
