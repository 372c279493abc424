"""
Persistence port.

The repository layer talks to storage only through this interface. The
SQLAlchemy implementation lives in ``dto_persist.db.adapter``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set


class PersistencePort(ABC):
    """Minimal set of record operations a storage backend must provide."""

    @abstractmethod
    def insert(self, fields: Dict[str, Any]) -> Any:
        """Insert a new record with ``fields`` and return it."""

    @abstractmethod
    def find(self, criteria: Dict[str, Any]) -> Optional[Any]:
        """Return the first record matching ``criteria``, or None."""

    @abstractmethod
    def update(self, record: Any, fields: Dict[str, Any]) -> Any:
        """Apply ``fields`` to ``record``, persist it and return it."""

    @abstractmethod
    def update_or_insert(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> Any:
        """Update the record matching ``criteria`` or insert a new one."""

    @abstractmethod
    def writable_fields(self) -> Set[str]:
        """Column names the record type accepts for mutation."""

    @property
    def name(self) -> str:
        """Name of the record type, used in log context."""
        return type(self).__name__
