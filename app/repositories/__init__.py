"""
Repository layer for database operations.

- TaskQueueRepository: outbound product task queue
- BrandRepository: brand lookups in the WordPress term tables
"""
from app.repositories.brand_repository import BrandRepository
from app.repositories.task_queue_repository import TaskQueueRepository

__all__ = [
    'BrandRepository',
    'TaskQueueRepository',
]
