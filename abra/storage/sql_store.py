import logging
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..database import Base
from ..models import StoredDocument
from ..shared.exceptions import StorageError
from .base import JSONStore

logger = logging.getLogger(__name__)


class SQLStore(JSONStore):
    """Stores each key as one row of the documents table"""

    name = "sql"

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def _get(self, key: str) -> Optional[Any]:
        db: Session = self.session_factory()
        try:
            document = db.get(StoredDocument, key)
            return None if document is None else document.value
        except SQLAlchemyError as e:
            logger.error(f"❌ Database read failed for {key}: {e}")
            raise StorageError(f"Database read failed for {key}") from e
        finally:
            db.close()

    def _put(self, key: str, value: Any, description: str) -> None:
        db: Session = self.session_factory()
        try:
            document = db.get(StoredDocument, key)
            if document is None:
                db.add(StoredDocument(key=key, value=value, description=description[:500]))
            else:
                document.value = value
                document.description = description[:500]
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Database write failed for {key}: {e}")
            raise StorageError(f"Database write failed for {key}") from e
        finally:
            db.close()
