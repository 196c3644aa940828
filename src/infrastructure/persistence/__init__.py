"""Database persistence infrastructure.

- Declarative bases for all database models
- Database connection and session management
- Repository implementations (see repositories/)
"""

from src.infrastructure.persistence.base import Base, BaseModel, BaseMutableModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "Base",
    "BaseModel",
    "BaseMutableModel",
    "Database",
]
