# services/base.py
from typing import Callable, Generic, TypeVar
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, OperationalError
from fastapi import HTTPException, status

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseService(Generic[T]):
    """Commits or rolls back one unit of work and maps database errors to HTTP errors."""

    # detail returned when a unique constraint rejects the write
    conflict_detail = "Record already exists"

    def __init__(self, db: Session):
        self.db = db

    async def _handle_db_operation(self, operation: Callable[[], T], description: str) -> T:
        try:
            result = operation()
            self.db.commit()
            return result
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Rejected %s: %s", description, str(e.orig))
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=self.conflict_detail) from e
        except OperationalError as e:
            self.db.rollback()
            logger.error("Database unavailable during %s: %s", description, str(e))
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable"
            ) from e
        except Exception as e:
            self.db.rollback()
            logger.error("Failed %s: %s", description, str(e))
            raise HTTPException(status_code=500, detail="Internal server error") from e
