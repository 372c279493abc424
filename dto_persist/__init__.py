"""
dto_persist

Typed DTOs mapped onto SQLAlchemy records through a thin repository layer.
"""

import importlib.metadata

__version__ = importlib.metadata.version("dto-persist")

from .context import BaseContext
from .dto import BaseDTO, Projection
from .exceptions import (
    DTOConfigurationError,
    DTOError,
    FactoryError,
    MissingIdentifierError,
    RecordNotFoundError,
    UniqueKeyNotImplementedError,
    UnknownFieldError,
    UnresolvableUpsertError,
)
from .factory import BaseFactory, record_to_dict
from .fields import UNSET, FieldDescriptor, FieldKind, Persist
from .filters import intersect_keys
from .log import configure_logging
from .ports import PersistencePort
from .repository import DTORepository, StatefulDTORepository

__all__ = [
    "BaseContext",
    "BaseDTO",
    "BaseFactory",
    "DTOConfigurationError",
    "DTOError",
    "DTORepository",
    "FactoryError",
    "FieldDescriptor",
    "FieldKind",
    "MissingIdentifierError",
    "Persist",
    "PersistencePort",
    "Projection",
    "RecordNotFoundError",
    "StatefulDTORepository",
    "UNSET",
    "UniqueKeyNotImplementedError",
    "UnknownFieldError",
    "UnresolvableUpsertError",
    "configure_logging",
    "intersect_keys",
    "record_to_dict",
]
