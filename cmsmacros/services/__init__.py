"""
Service layer — public API.
"""

from .base import RepositoryService
from .macros import DuplicateMacroAlias, MacroNotFound, MacroService, MacroServiceError

__all__ = [
    "RepositoryService",
    "MacroService",
    "MacroServiceError",
    "MacroNotFound",
    "DuplicateMacroAlias",
]
