from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url)
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# WordPress database holding the taxonomy tables; defaults to the queue database
wp_database_url = settings.wp_database_url or settings.database_url
wp_engine = engine if wp_database_url == settings.database_url else create_engine(
    wp_database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(wp_database_url)
)
WordPressSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=wp_engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_wp_db():
    db = WordPressSessionLocal()
    try:
        yield db
    finally:
        db.close()
