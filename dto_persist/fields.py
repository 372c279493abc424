"""
Persistence metadata for DTO fields.

A DTO field is persisted when its annotation carries exactly one ``Persist``
marker::

    class UserDTO(BaseDTO):
        name: Annotated[str, Persist("name")]
        nickname: Annotated[Optional[str], Persist("nickname", nullable=True)] = UNSET

Persistence semantics:
- Only fields carrying ``Persist`` appear in the persistence projection.
- ``column`` is the target column name; projection keys are always columns.
- ``nullable=True`` and a ``None`` value put ``column: None`` in the projection,
  so the column is set to NULL.
- ``nullable=False`` (default) and a ``None`` value leave the column out, so the
  stored value is left untouched.
- A field still holding ``UNSET`` has never been given a value and is left out
  regardless of ``nullable``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class _Unset:
    """Marker for a DTO field that has never been assigned."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    # pydantic copies field defaults; the marker must stay a singleton
    def __copy__(self) -> "_Unset":
        return self

    def __deepcopy__(self, memo) -> "_Unset":
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class Persist:
    """Marks a DTO field as persistable under ``column``."""

    column: str
    nullable: bool = False


class FieldKind(str, Enum):
    """How a persisted field's value is written to its column."""

    SCALAR = "scalar"
    # nested DTO, written as its identifier (foreign key)
    REFERENCE = "reference"


@dataclass(frozen=True)
class FieldDescriptor:
    """One row of a DTO class's field table."""

    name: str
    kind: FieldKind = FieldKind.SCALAR
    persist: Optional[Persist] = None

    @property
    def persisted(self) -> bool:
        return self.persist is not None

    @property
    def column(self) -> Optional[str]:
        return self.persist.column if self.persist else None

    @property
    def nullable(self) -> bool:
        return bool(self.persist and self.persist.nullable)
