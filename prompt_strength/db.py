"""
DATABASE CONFIGURATION - SQLAlchemy setup and session management

This file configures the database connection for the rubric store.
It sets up:
1. Database engine with connection pooling
2. Session factory for creating database sessions
3. Base class for all ORM models
4. Dependency injection function for FastAPI routes
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from prompt_strength.config import DATABASE_URL

# STEP 1: Create database engine
# SQLite connections are shared with FastAPI's threadpool, so the same-thread check is off
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# STEP 2: Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# STEP 3: Create base class for all ORM models
Base = declarative_base()

def get_db():
    """
    FastAPI dependency for database sessions.

    Usage in routes:
    def my_route(db: Session = Depends(get_db)):
        # Use db session here
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
