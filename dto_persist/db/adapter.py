"""
SQLAlchemy implementation of the persistence port.

Binds a session to one mapped model class. The writable-field set is the
model's ``__fillable__`` attribute when declared; otherwise every mapped column
except the primary key.
"""

from typing import Any, Dict, Optional, Set

import structlog
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from ..config import get_settings
from ..ports import PersistencePort

logger = structlog.get_logger()


class SQLAlchemyPort(PersistencePort):
    """Persistence port over a SQLAlchemy session and model class."""

    def __init__(self, db: Session, model: type, commit: Optional[bool] = None):
        self.db = db
        self.model = model
        self.commit = get_settings().commit_on_write if commit is None else commit
        self.logger = logger.bind(model=model.__name__)

    @property
    def name(self) -> str:
        return self.model.__name__

    def writable_fields(self) -> Set[str]:
        fillable = getattr(self.model, "__fillable__", None)
        if fillable is not None:
            return set(fillable)
        mapper = inspect(self.model)
        primary = {column.key for column in mapper.primary_key}
        return {
            attr.key
            for attr in mapper.column_attrs
            if not {column.key for column in attr.columns} & primary
        }

    def _persist(self, record: Any) -> Any:
        if self.commit:
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        else:
            self.db.flush()
        self.db.refresh(record)
        return record

    def insert(self, fields: Dict[str, Any]) -> Any:
        record = self.model(**fields)
        self.db.add(record)
        self.logger.debug("record_insert", columns=sorted(fields))
        return self._persist(record)

    def find(self, criteria: Dict[str, Any]) -> Optional[Any]:
        return self.db.query(self.model).filter_by(**criteria).first()

    def update(self, record: Any, fields: Dict[str, Any]) -> Any:
        for key, value in fields.items():
            setattr(record, key, value)
        self.logger.debug("record_update", columns=sorted(fields))
        return self._persist(record)

    def update_or_insert(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> Any:
        record = self.find(criteria)
        if record is None:
            return self.insert({**criteria, **fields})
        return self.update(record, fields)
