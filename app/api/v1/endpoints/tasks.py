"""Read-only endpoints over the outbound task queue."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.task_models import QueueTask
from app.repositories import TaskQueueRepository
from app.schemas.task_schemas import TaskQueueStats, TaskResponse

router = APIRouter()


@router.get("/", response_model=List[TaskResponse])
def list_tasks(
    status: Optional[str] = Query(None, description="pending, sent, failed"),
    action: Optional[str] = Query(None, description="create, update, delete"),
    entity_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    repo = TaskQueueRepository(db)
    return repo.get_tasks(
        status=status,
        action=action,
        entity_id=entity_id,
        limit=limit,
        offset=offset
    )


@router.get("/stats", response_model=TaskQueueStats)
def task_stats(db: Session = Depends(get_db)):
    return TaskQueueRepository(db).get_queue_statistics()


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db)):
    task = db.query(QueueTask).filter(QueueTask.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task
