"""
DTO repositories.

``DTORepository`` writes DTOs through a persistence port using the DTO's
projection filtered by the port's writable fields. ``StatefulDTORepository``
binds one DTO to one repository.
"""

from typing import Any, Dict, Optional

import structlog

from .config import get_settings
from .dto import BaseDTO
from .exceptions import (
    MissingIdentifierError,
    RecordNotFoundError,
    UniqueKeyNotImplementedError,
    UnresolvableUpsertError,
)
from .ports import PersistencePort

logger = structlog.get_logger()


def _default_id_column() -> str:
    return get_settings().default_id_column


class DTORepository:
    """Create, update and upsert records from DTOs."""

    def __init__(self, port: PersistencePort):
        self.port = port

    def _logger(self, dto: BaseDTO):
        return logger.bind(dto=type(dto).__name__, model=self.port.name)

    def create(self, dto: BaseDTO) -> Any:
        """Insert a new record built from ``dto``."""
        data = dto.filter_for_model(self.port)
        self._logger(dto).info("dto_create", columns=sorted(data))
        return self.port.insert(data)

    def update(self, dto: BaseDTO, id_column: Optional[str] = None) -> Any:
        """Update the record identified by ``dto``'s unique key and identifier.

        Raises:
            MissingIdentifierError: the DTO has no value for ``id_column``.
            RecordNotFoundError: no record matches.
            UniqueKeyNotImplementedError: the DTO does not define ``unique()``.
        """
        id_column = id_column or _default_id_column()
        dto_logger = self._logger(dto)
        data = dto.filter_for_model(self.port)

        identifier = dto.get(id_column)
        if identifier is None:
            dto_logger.warning("dto_update_missing_identifier", id_column=id_column)
            raise MissingIdentifierError(type(dto).__name__, id_column)

        criteria: Dict[str, Any] = dict(dto.unique())
        criteria[id_column] = identifier

        record = self.port.find(criteria)
        if record is None:
            dto_logger.warning("dto_update_not_found", criteria=criteria)
            raise RecordNotFoundError(type(dto).__name__, criteria)

        dto_logger.info("dto_update", id_column=id_column, columns=sorted(data))
        return self.port.update(record, data)

    def create_or_update(self, dto: BaseDTO, id_column: Optional[str] = None) -> Any:
        """Upsert keyed on ``id_column`` when set on the DTO, else on ``unique()``.

        Pass ``id_column=""`` to skip the identifier and go straight to the
        unique key.

        Raises:
            UnresolvableUpsertError: neither an identifier nor a unique key.
        """
        if id_column is None:
            id_column = _default_id_column()
        dto_logger = self._logger(dto)
        data = dto.filter_for_model(self.port)

        if id_column and dto.get(id_column) is not None:
            criteria = {id_column: dto.get(id_column)}
            dto_logger.info("dto_upsert", key="identifier", criteria=criteria)
            return self.port.update_or_insert(criteria, data)

        try:
            unique = dto.unique()
        except UniqueKeyNotImplementedError as exc:
            dto_logger.warning("dto_upsert_unresolvable", id_column=id_column)
            raise UnresolvableUpsertError(type(dto).__name__, id_column) from exc

        if not unique:
            dto_logger.warning("dto_upsert_unresolvable", id_column=id_column)
            raise UnresolvableUpsertError(type(dto).__name__, id_column)

        dto_logger.info("dto_upsert", key="unique", criteria=dict(unique))
        return self.port.update_or_insert(dict(unique), data)


class StatefulDTORepository:
    """A repository bound to a single DTO."""

    def __init__(self, repository: DTORepository, dto: BaseDTO):
        self.repository = repository
        self.dto = dto

    def create(self) -> Any:
        return self.repository.create(self.dto)

    def update(self, id_column: Optional[str] = None) -> Any:
        return self.repository.update(self.dto, id_column)

    def create_or_update(self, id_column: Optional[str] = None) -> Any:
        return self.repository.create_or_update(self.dto, id_column)
