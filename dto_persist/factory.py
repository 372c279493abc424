"""
DTO factories.

A factory builds DTOs from raw mappings (``from_dict``, implemented per DTO)
or from persisted records (``from_record``).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from .dto import BaseDTO
from .exceptions import FactoryError


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Raw mapping of a persisted record.

    Uses the record's own ``to_dict()`` when it has one, otherwise its mapped
    column attributes.
    """
    to_dict = getattr(record, "to_dict", None)
    if callable(to_dict):
        return dict(to_dict())
    try:
        mapper = inspect(type(record))
    except NoInspectionAvailable as exc:
        raise FactoryError(
            f"Cannot read fields of {type(record).__name__}: not a mapped record"
        ) from exc
    return {attr.key: getattr(record, attr.key) for attr in mapper.column_attrs}


class BaseFactory(ABC):
    """Base class for DTO factories."""

    @abstractmethod
    def from_dict(self, data: Mapping[str, Any]) -> BaseDTO:
        """Build a DTO from a raw key/value mapping."""

    def from_record(self, record: Any) -> BaseDTO:
        """Build a DTO from a persisted record."""
        return self.from_dict(record_to_dict(record))

    def require(self, data: Mapping[str, Any], key: str) -> Any:
        """Value of ``key`` in ``data``; FactoryError when missing."""
        if key not in data:
            raise FactoryError(f"{type(self).__name__} requires key [{key}]")
        return data[key]
