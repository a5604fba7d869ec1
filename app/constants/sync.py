"""Constants for the outbound task queue."""

# Remote entity id used for products that have no variations
NO_VARIANTS = "no-variants"


class TaskTopic:
    """Queue topic constants."""
    PRODUCTS = "products"


class TaskAction:
    """Task action constants."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class TaskStatus:
    """Queue task status constants."""
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
