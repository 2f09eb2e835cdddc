"""
In-memory storage: entity tables and the CRUD facade.
"""

from .memory import MemStorage, as_date
from .tables import EntityTable, MissingFieldError, UnknownFieldError

__all__ = [
    'MemStorage',
    'as_date',
    'EntityTable',
    'MissingFieldError',
    'UnknownFieldError',
]
