"""
DTO base class.

A DTO is a pydantic model whose fields describe how application data maps onto
a persisted record. Each DTO class gets a field table, built once when the class
is defined, recording for every field its ``Persist`` marker (if any) and
whether it holds a scalar or a nested DTO reference.

Two views are derived from an instance:

- ``to_dict()``: the full state, keyed by field name, nested DTOs expanded.
- ``to_persistence()``: the projection sent to storage, keyed by column name.
"""

import types
import typing
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .exceptions import (
    DTOConfigurationError,
    DTOError,
    UniqueKeyNotImplementedError,
    UnknownFieldError,
)
from .fields import UNSET, FieldDescriptor, FieldKind, Persist
from .filters import intersect_keys
from .ports import PersistencePort


_UNION_TYPES = {typing.Union}
if hasattr(types, "UnionType"):
    _UNION_TYPES.add(types.UnionType)


class Projection(dict):
    """Column-keyed persistence mapping.

    ``relations`` holds the full state of nested DTOs, keyed by field name. It is
    kept for diagnostics and is never sent to storage.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.relations: Dict[str, Any] = {}


def _is_dto_type(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    # Optional[DTO] / DTO | None
    if origin in _UNION_TYPES:
        return any(_is_dto_type(arg) for arg in typing.get_args(annotation))
    return origin is None and isinstance(annotation, type) and issubclass(annotation, BaseDTO)


def build_field_table(cls: type) -> Tuple[FieldDescriptor, ...]:
    """Build the field table of a DTO class.

    Raises DTOConfigurationError when a field carries more than one ``Persist``
    marker, an empty column name, or a column already used by another field.
    """
    table = []
    columns: Dict[str, str] = {}
    for name, info in cls.model_fields.items():
        markers = [m for m in info.metadata if isinstance(m, Persist)]
        if len(markers) > 1:
            raise DTOConfigurationError(
                f"Field [{name}] of DTO {cls.__name__} has {len(markers)} Persist markers",
                cls.__name__,
            )
        persist = markers[0] if markers else None
        if persist is not None:
            if not persist.column:
                raise DTOConfigurationError(
                    f"Field [{name}] of DTO {cls.__name__} has an empty column name",
                    cls.__name__,
                )
            if persist.column in columns:
                raise DTOConfigurationError(
                    f"Column [{persist.column}] of DTO {cls.__name__} is declared by "
                    f"both [{columns[persist.column]}] and [{name}]",
                    cls.__name__,
                )
            columns[persist.column] = name
        kind = FieldKind.REFERENCE if _is_dto_type(info.annotation) else FieldKind.SCALAR
        table.append(FieldDescriptor(name=name, kind=kind, persist=persist))
    return tuple(table)


class BaseDTO(BaseModel):
    """Base class for all DTOs.

    Invariants:
    - ``id`` may be assigned but, once set, never cleared.
    - Only fields annotated with ``Persist`` reach storage.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    __field_table__: ClassVar[Tuple[FieldDescriptor, ...]] = ()

    id: Optional[int] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.__field_table__ = build_field_table(cls)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and value is None and self.__dict__.get("id") not in (None, UNSET):
            raise DTOError(
                f"Identifier of DTO {type(self).__name__} cannot be cleared",
                type(self).__name__,
            )
        super().__setattr__(name, value)

    @classmethod
    def field_table(cls) -> Tuple[FieldDescriptor, ...]:
        return cls.__field_table__

    @classmethod
    def persisted_columns(cls) -> Tuple[str, ...]:
        return tuple(f.column for f in cls.__field_table__ if f.persisted)

    def _assigned(self) -> Iterable[Tuple[FieldDescriptor, Any]]:
        for descriptor in self.field_table():
            value = getattr(self, descriptor.name)
            if value is UNSET:
                continue
            yield descriptor, value

    def to_dict(self) -> Dict[str, Any]:
        """Full state keyed by field name, nested DTOs expanded."""
        data: Dict[str, Any] = {}
        for descriptor, value in self._assigned():
            if isinstance(value, BaseDTO):
                value = value.to_dict()
            data[descriptor.name] = value
        return data

    def to_persistence(self) -> Projection:
        """Column-keyed projection of the persisted fields.

        A nested DTO is written as its identifier under the parent column. A
        ``None`` value is written only when the field is declared nullable.
        """
        projection = Projection()
        for descriptor, value in self._assigned():
            if not descriptor.persisted:
                continue
            if value is not None and (
                descriptor.kind is FieldKind.REFERENCE or isinstance(value, BaseDTO)
            ):
                projection[descriptor.column] = value.id
                projection.relations[descriptor.name] = value.to_dict()
                continue
            if value is None and not descriptor.nullable:
                continue
            projection[descriptor.column] = value
        return projection

    def filter_for_model(self, port: PersistencePort) -> Dict[str, Any]:
        """Projection restricted to the columns ``port`` accepts."""
        return intersect_keys(self.to_persistence(), port.writable_fields())

    def set_id(self, id: int) -> "BaseDTO":
        if id is None:
            raise DTOError(
                f"Identifier of DTO {type(self).__name__} cannot be cleared",
                type(self).__name__,
            )
        self.id = id
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Value of field ``key``; ``default`` if it was never assigned."""
        if key not in type(self).model_fields:
            raise UnknownFieldError(type(self).__name__, key)
        value = getattr(self, key)
        return default if value is UNSET else value

    def set(self, key: str, value: Any) -> "BaseDTO":
        if key not in type(self).model_fields:
            raise UnknownFieldError(type(self).__name__, key)
        setattr(self, key, value)
        return self

    def unique(self) -> Dict[str, Any]:
        """Unique-key criteria identifying this DTO's record.

        Subclasses that are updated or upserted by logical key override this.
        """
        raise UniqueKeyNotImplementedError(type(self).__name__)


BaseDTO.__field_table__ = build_field_table(BaseDTO)
