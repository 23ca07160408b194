"""
Database connection and session management for the listing service
"""
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import Request
from typing import Generator
import logging

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Engine and session factory for one database.

    Built once by the application factory and handed to each request
    through ``get_db``; repositories receive the resulting session.
    """

    def __init__(self, settings: Settings):
        self.url = settings.DATABASE_URL
        if self.url.startswith("sqlite"):
            self.engine = create_engine(
                self.url,
                connect_args={"check_same_thread": False},
                echo=settings.DB_ECHO
            )
        else:
            self.engine = create_engine(
                self.url,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_pre_ping=True,
                echo=settings.DB_ECHO
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def session(self) -> Session:
        return self.SessionLocal()

    def init_db(self) -> None:
        """
        Create all tables and make sure the active-row unique indexes exist.
        Should be called on application startup.
        """
        # Import models to ensure they are registered with Base
        from .models import User, ACTIVE_USER_INDEXES

        try:
            Base.metadata.create_all(bind=self.engine)

            # Tables created by an older schema may lack the partial indexes
            inspector = inspect(self.engine)
            existing = {idx["name"] for idx in inspector.get_indexes(User.__tablename__)}
            for idx in ACTIVE_USER_INDEXES:
                if idx.name not in existing:
                    try:
                        idx.create(bind=self.engine)
                    except SQLAlchemyError:
                        # Index may already exist (race condition)
                        logger.warning("Index %s could not be created", idx.name)
            logger.info("Database initialized successfully")
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    def check_connection(self) -> bool:
        """
        Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
