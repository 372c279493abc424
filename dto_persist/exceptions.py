"""
Errors raised by DTOs, factories and repositories.

Every error carries a stable ``error`` code in its ``to_dict()`` payload so
callers (API layers, job runners) can report failures without string matching.
"""

from typing import Any, Dict, Optional


class DTOError(Exception):
    """Base class for all dto_persist errors."""

    code = "DTO_ERROR"

    def __init__(self, message: str, dto_class: Optional[str] = None):
        self.message = message
        self.dto_class = dto_class
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "dto_class": self.dto_class,
            "message": self.message,
        }


class DTOConfigurationError(DTOError):
    """Raised when a DTO class declares invalid persistence metadata."""

    code = "DTO_CONFIGURATION"


class UnknownFieldError(DTOError):
    """Raised when a DTO is asked for a field it does not declare."""

    code = "UNKNOWN_FIELD"

    def __init__(self, dto_class: str, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Field [{field_name}] does not exist on DTO {dto_class}", dto_class
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field_name
        return data


class MissingIdentifierError(DTOError):
    """Raised when an update is requested without a usable identifier."""

    code = "MISSING_IDENTIFIER"

    def __init__(self, dto_class: str, id_column: Optional[str]):
        self.id_column = id_column
        super().__init__(
            f"Identifier [{id_column}] of DTO {dto_class} is null", dto_class
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["id_column"] = self.id_column
        return data


class RecordNotFoundError(DTOError):
    """Raised when an update targets a record that does not exist."""

    code = "RECORD_NOT_FOUND"

    def __init__(self, dto_class: str, criteria: Dict[str, Any]):
        self.criteria = dict(criteria)
        super().__init__(
            f"No record matches {self.criteria} for DTO {dto_class}", dto_class
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["criteria"] = self.criteria
        return data


class UnresolvableUpsertError(DTOError):
    """Raised when an upsert has neither an identifier nor a unique key."""

    code = "UNRESOLVABLE_UPSERT"

    def __init__(self, dto_class: str, id_column: Optional[str]):
        self.id_column = id_column
        super().__init__(
            f"Cannot upsert {dto_class}: missing identifier ({id_column}) "
            "and unique key",
            dto_class,
        )


class UniqueKeyNotImplementedError(DTOError):
    """Raised when a DTO without a unique-key mapping is asked for one."""

    code = "UNIQUE_KEY_NOT_IMPLEMENTED"

    def __init__(self, dto_class: str):
        super().__init__(
            f"Method unique() must be implemented in DTO {dto_class}", dto_class
        )


class FactoryError(DTOError):
    """Raised when a factory cannot build a DTO from its input."""

    code = "FACTORY_ERROR"
