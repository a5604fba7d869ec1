from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.api.v1.endpoints.hooks import router as hooks_router
from app.api.v1.endpoints.tasks import router as tasks_router
from app.core.config import settings
from app.db.base import Base
from app.db.session import engine
from app.models import QueueTask  # noqa: F401  registers the table on Base

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    _logger.info("Task queue tables ready")
    yield


app = FastAPI(title="WooCommerce catalog sync", lifespan=lifespan)

app.include_router(hooks_router, prefix="/hooks", tags=["hooks"])
app.include_router(tasks_router, prefix="/tasks", tags=["tasks"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5010)
