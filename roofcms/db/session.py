from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roofcms.core.config import get_settings
from roofcms.db.store import RelationalStore


settings = get_settings()

database_engine = create_engine(
    settings.database_url,
    echo=False,
    future=True,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
store = RelationalStore(SessionLocal, max_workers=settings.store_max_workers)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store() -> RelationalStore:
    return store
