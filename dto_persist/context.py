"""
DTO contexts.

A context groups what application code needs to work with one kind of DTO:
its factory and a stateful repository bound to a DTO instance.
"""

from abc import ABC, abstractmethod

from .dto import BaseDTO
from .factory import BaseFactory
from .ports import PersistencePort
from .repository import DTORepository, StatefulDTORepository


class BaseContext(ABC):
    """Binds a DTO to its factory and repository."""

    def __init__(self, dto: BaseDTO):
        self.dto = dto

    def base_factory(self, factory: BaseFactory) -> BaseFactory:
        return factory

    def base_repository(self, port: PersistencePort) -> StatefulDTORepository:
        return StatefulDTORepository(DTORepository(port), self.dto)

    @abstractmethod
    def factory(self) -> BaseFactory:
        """Factory for this context's DTO type."""

    @abstractmethod
    def repository(self) -> StatefulDTORepository:
        """Stateful repository bound to this context's DTO."""
