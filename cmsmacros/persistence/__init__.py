"""
Persistence layer — unit of work, generic repositories and their factory.
"""

from .unit_of_work import UnitOfWork, UnitOfWorkProvider
from .repository import AuditRepository, MacroRepository, Repository
from .factory import RepositoryFactory

__all__ = [
    "UnitOfWork",
    "UnitOfWorkProvider",
    "Repository",
    "MacroRepository",
    "AuditRepository",
    "RepositoryFactory",
]
