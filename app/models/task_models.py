"""SQLAlchemy model for the outbound product task queue."""

from sqlalchemy import Column, Integer, String, DateTime, JSON, Text, Index, func

from app.constants.sync import TaskStatus
from app.db.base import Base


class QueueTask(Base):
    """A create/update/delete operation waiting to be delivered to the search service."""

    __tablename__ = "task_queue"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    topic = Column(String(50), nullable=False, comment="e.g., products")
    action = Column(String(20), nullable=False, comment="create, update, delete")
    entity_id = Column(Integer, nullable=False, index=True,
                       comment="WooCommerce product or variation ID")
    payload = Column(JSON, nullable=False, default=dict)

    status = Column(String(20), nullable=False, default=TaskStatus.PENDING,
                    comment="pending, sent, failed")
    retry_count = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    executed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_task_queue_lookup", "topic", "action", "entity_id", "status"),
    )

    def __repr__(self):
        return (
            f"<QueueTask(id={self.id}, {self.topic}.{self.action}, "
            f"entity={self.entity_id}, status={self.status})>"
        )
