"""DTOs, models, factories and ports shared by the test suite."""

from typing import Annotated, Any, Dict, List, Mapping, Optional, Set

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from dto_persist import UNSET, BaseDTO, BaseFactory, Persist, PersistencePort
from dto_persist.context import BaseContext
from dto_persist.db.base import Base


# =============================================================================
# Models
# =============================================================================


class UserModel(Base):
    __tablename__ = "test_users"
    __fillable__ = ("name", "email", "password")

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    email = Column(String(200), nullable=False)
    password = Column(String(200), nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
        }


class PostModel(Base):
    __tablename__ = "test_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    author_id = Column(Integer, ForeignKey("test_users.id"), nullable=True)


# =============================================================================
# DTOs
# =============================================================================


class TitleDTO(BaseDTO):
    id: Annotated[Optional[int], Persist("id")] = None
    name: Annotated[str, Persist("name")]

    def unique(self) -> Dict[str, Any]:
        return {"name": self.name}


class NullableIdTitleDTO(BaseDTO):
    id: Annotated[Optional[int], Persist("id", nullable=True)] = None
    name: Annotated[str, Persist("name")]


class UserDTO(BaseDTO):
    id: Annotated[Optional[int], Persist("id")] = None
    name: Annotated[str, Persist("name")]
    email: Annotated[str, Persist("email")]
    password: Annotated[str, Persist("password")]

    def unique(self) -> Dict[str, Any]:
        return {"name": self.name}


class PostDTO(BaseDTO):
    id: Annotated[Optional[int], Persist("id")] = None
    title: Annotated[str, Persist("title")]
    description: Annotated[Optional[str], Persist("description", nullable=True)] = UNSET
    author: Annotated[Optional[UserDTO], Persist("author_id", nullable=True)] = UNSET
    draft_note: Optional[str] = None


# =============================================================================
# Factories and contexts
# =============================================================================


class UserFactory(BaseFactory):
    def from_dict(self, data: Mapping[str, Any]) -> UserDTO:
        return UserDTO(
            id=data.get("id"),
            name=self.require(data, "name"),
            email=self.require(data, "email"),
            password=self.require(data, "password"),
        )


class PostFactory(BaseFactory):
    def from_dict(self, data: Mapping[str, Any]) -> PostDTO:
        return PostDTO(
            id=data.get("id"),
            title=self.require(data, "title"),
            description=data.get("description"),
        )


class UserContext(BaseContext):
    def __init__(self, dto: UserDTO, port: PersistencePort):
        super().__init__(dto)
        self.port = port

    def factory(self) -> UserFactory:
        return self.base_factory(UserFactory())

    def repository(self):
        return self.base_repository(self.port)


# =============================================================================
# In-memory port
# =============================================================================


class InMemoryPort(PersistencePort):
    """Dict-backed port that records every call."""

    def __init__(self, writable, records: Optional[List[Dict[str, Any]]] = None):
        self.writable = set(writable)
        self.records = list(records or [])
        self.calls: List[tuple] = []

    def insert(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", dict(fields)))
        record = dict(fields)
        self.records.append(record)
        return record

    def find(self, criteria: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append(("find", dict(criteria)))
        for record in self.records:
            if all(record.get(key) == value for key, value in criteria.items()):
                return record
        return None

    def update(self, record: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", dict(fields)))
        record.update(fields)
        return record

    def update_or_insert(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update_or_insert", dict(criteria), dict(fields)))
        for record in self.records:
            if all(record.get(key) == value for key, value in criteria.items()):
                record.update(fields)
                return record
        record = {**criteria, **fields}
        self.records.append(record)
        return record

    def writable_fields(self) -> Set[str]:
        return set(self.writable)
