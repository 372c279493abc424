"""Declarative base for models managed through DTOs."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models managed through DTOs."""

    pass
