"""
Database utility functions for connection management and health checks
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import inspect, text
from contextlib import contextmanager
from typing import Generator, Any, Dict
import logging
import time

from campaign_settings.core.database import SessionLocal, engine
from campaign_settings.models.base import Base

logger = logging.getLogger(__name__)

@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic cleanup
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        db.rollback()
        raise
    finally:
        db.close()

def create_all_tables() -> None:
    """
    Create all database tables
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("All database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def check_database_connection() -> bool:
    """
    Check if database connection is working
    """
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False

class DatabaseHealthCheck:
    """
    Database health check utilities
    """

    @staticmethod
    def check_connection() -> Dict[str, Any]:
        """
        Connection, schema presence and query timing in one report.
        Status is "healthy", "degraded" (tables missing) or "unhealthy".
        """
        health_status = {
            "status": "unknown",
            "connection": False,
            "tables_exist": False,
            "can_query": False,
            "details": {}
        }

        try:
            with get_db_session() as db:
                start_time = time.time()
                db.execute(text("SELECT 1"))
                query_time = time.time() - start_time
                health_status["connection"] = True
                health_status["can_query"] = True
                health_status["details"]["query_time_ms"] = round(query_time * 1000, 2)

                existing = set(inspect(db.get_bind()).get_table_names())
                expected = set(Base.metadata.tables)
                missing = sorted(expected - existing)
                health_status["tables_exist"] = not missing
                health_status["details"]["table_count"] = len(existing & expected)
                if missing:
                    health_status["details"]["missing_tables"] = missing

                if health_status["tables_exist"]:
                    health_status["status"] = "healthy"
                else:
                    health_status["status"] = "degraded"

        except Exception as e:
            health_status["status"] = "unhealthy"
            health_status["details"]["error"] = "Database unavailable"
            logger.error(f"Database health check failed: {e}")

        return health_status
