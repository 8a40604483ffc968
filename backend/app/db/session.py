"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from app.core.config import settings
from app.db.base import Base


def build_engine_kwargs(url: str) -> dict:
    """Engine options for the configured store."""
    kwargs = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        return kwargs

    kwargs["pool_size"] = settings.DB_POOL_SIZE
    kwargs["pool_recycle"] = 3600
    if settings.DB_SSL:
        # PyMySQL enables TLS when an ssl dict is present
        kwargs["connect_args"] = {"ssl": {"check_hostname": False}}
    return kwargs


DATABASE_URL = settings.get_database_url()

engine = create_engine(DATABASE_URL, **build_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    import app.models  # noqa: F401  (registers models on Base.metadata)
    Base.metadata.create_all(bind=engine)


def reset_db():
    """Drop and recreate all tables."""
    import app.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
