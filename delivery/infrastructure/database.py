from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from delivery.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# expire_on_commit=False: repositories hand records back after the session is closed.
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

Base = declarative_base()
