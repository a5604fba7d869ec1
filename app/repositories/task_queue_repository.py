"""
Task queue repository.

Handles the outbound product task queue. This module only creates, queries
and amends tasks; delivering them is the delivery worker's job, which
reports back through ``mark_task_sent`` / ``mark_task_failed``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.constants.sync import TaskAction, TaskStatus
from app.models.task_models import QueueTask

logger = logging.getLogger(__name__)


class TaskQueueRepository:
    """Repository for queue task operations."""

    def __init__(self, db: Session):
        """
        Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def find_alive_task(
        self,
        topic: str,
        action: str,
        entity_id: int
    ) -> Optional[QueueTask]:
        """
        Get the oldest task not yet delivered for an entity.

        Args:
            topic: Queue topic (e.g., "products")
            action: create, update or delete
            entity_id: WooCommerce product or variation ID

        Returns:
            QueueTask record or None
        """
        return self.db.query(QueueTask).filter(
            QueueTask.topic == topic,
            QueueTask.action == action,
            QueueTask.entity_id == entity_id,
            QueueTask.status == TaskStatus.PENDING
        ).order_by(QueueTask.id.asc()).first()

    def add_task(
        self,
        topic: str,
        action: str,
        entity_id: int,
        payload: Dict[str, Any]
    ) -> QueueTask:
        """
        Create a pending task.

        Args:
            topic: Queue topic
            action: create, update or delete
            entity_id: WooCommerce product or variation ID
            payload: Task payload

        Returns:
            Created QueueTask record
        """
        task = QueueTask(
            topic=topic,
            action=action,
            entity_id=entity_id,
            payload=payload,
            status=TaskStatus.PENDING
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        logger.info(f"Queued task {task.id}: {topic}.{action} entity={entity_id}")
        return task

    def update_task(
        self,
        task_id: int,
        payload_patch: Dict[str, Any]
    ) -> Optional[QueueTask]:
        """
        Merge ``payload_patch`` into a task's payload (top-level keys replaced).

        Args:
            task_id: Task ID
            payload_patch: Keys to set on the payload

        Returns:
            Updated QueueTask record or None if not found
        """
        task = self.db.query(QueueTask).filter(QueueTask.id == task_id).first()
        if task:
            # Reassign so the JSON column is flagged dirty
            task.payload = {**(task.payload or {}), **payload_patch}
            self.db.commit()
            self.db.refresh(task)
            logger.info(f"Merged payload into task {task_id} ({task.topic}.{task.action})")
        return task

    def upsert_update_task(
        self,
        topic: str,
        entity_id: int,
        create_patch: Callable[[], Dict[str, Any]],
        update_payload: Callable[[], Dict[str, Any]]
    ) -> QueueTask:
        """
        Coalesce an update for an entity into the queue.

        A pending create absorbs the update (it has not been delivered yet,
        so it can carry the fresh data itself). Otherwise a pending update
        is amended, and only when neither exists is a new update queued.

        Args:
            topic: Queue topic
            entity_id: WooCommerce product or variation ID
            create_patch: Builds the patch merged into a pending create
            update_payload: Builds the payload of the update task

        Returns:
            The task that now carries the update
        """
        task = self.find_alive_task(topic, TaskAction.CREATE, entity_id)
        if task:
            return self.update_task(task.id, create_patch())

        task = self.find_alive_task(topic, TaskAction.UPDATE, entity_id)
        if task:
            return self.update_task(task.id, update_payload())

        return self.add_task(topic, TaskAction.UPDATE, entity_id, update_payload())

    def get_pending_tasks(
        self,
        topic: Optional[str] = None,
        limit: int = 100
    ) -> List[QueueTask]:
        """Get pending tasks in insertion order, for the delivery worker."""
        query = self.db.query(QueueTask).filter(
            QueueTask.status == TaskStatus.PENDING
        )
        if topic:
            query = query.filter(QueueTask.topic == topic)
        return query.order_by(QueueTask.id.asc()).limit(limit).all()

    def get_tasks(
        self,
        status: Optional[str] = None,
        action: Optional[str] = None,
        entity_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[QueueTask]:
        """
        Get tasks with filters, newest first.

        Args:
            status: Filter by status
            action: Filter by action
            entity_id: Filter by entity ID
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of QueueTask records
        """
        query = self.db.query(QueueTask)

        if status:
            query = query.filter(QueueTask.status == status)
        if action:
            query = query.filter(QueueTask.action == action)
        if entity_id is not None:
            query = query.filter(QueueTask.entity_id == entity_id)

        return query.order_by(QueueTask.id.desc()).offset(offset).limit(limit).all()

    def mark_task_sent(self, task_id: int) -> Optional[QueueTask]:
        task = self.db.query(QueueTask).filter(QueueTask.id == task_id).first()
        if task:
            task.status = TaskStatus.SENT
            task.executed_at = datetime.now(timezone.utc)
            task.error_message = None
            self.db.commit()
            self.db.refresh(task)
        return task

    def mark_task_failed(self, task_id: int, error_message: str) -> Optional[QueueTask]:
        task = self.db.query(QueueTask).filter(QueueTask.id == task_id).first()
        if task:
            task.status = TaskStatus.FAILED
            task.retry_count += 1
            task.error_message = error_message
            task.executed_at = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(task)
            logger.warning(f"Task {task_id} failed: {error_message}")
        return task

    def count_pending(self) -> int:
        return self.db.query(QueueTask).filter(
            QueueTask.status == TaskStatus.PENDING
        ).count()

    def get_queue_statistics(self) -> Dict[str, Any]:
        """
        Get queue statistics.

        Returns:
            Dictionary with statistics: total, pending, sent, failed, actions
        """
        query = self.db.query(QueueTask)

        total = query.count()
        pending = query.filter(QueueTask.status == TaskStatus.PENDING).count()
        sent = query.filter(QueueTask.status == TaskStatus.SENT).count()
        failed = query.filter(QueueTask.status == TaskStatus.FAILED).count()

        actions = self.db.query(
            QueueTask.action,
            func.count(QueueTask.id)
        ).group_by(QueueTask.action).all()

        return {
            "total": total,
            "pending": pending,
            "sent": sent,
            "failed": failed,
            "actions": {action: count for action, count in actions}
        }
