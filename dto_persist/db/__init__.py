"""
Database package for dto_persist.
"""

from .adapter import SQLAlchemyPort
from .base import Base

__all__ = [
    "Base",
    "SQLAlchemyPort",
]
