from app.models.task_models import QueueTask
from app.models.wordpress import TermTables, get_term_tables, wp_metadata

__all__ = [
    "QueueTask",
    "TermTables",
    "get_term_tables",
    "wp_metadata",
]
