from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from teapot.core.config import settings


def make_engine(url: str):
    # SQLite is used from the event loop thread and FastAPI's threadpool alike
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()
