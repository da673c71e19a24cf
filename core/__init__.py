"""
Core module containing configuration, logging, errors and the document store contract.
"""

from .config import Settings, get_settings
from .logger import logger
from .errors import (
    TaskManagerError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    PartialFailureError,
)
from .document_store import DocumentStoreError, IDocumentStore, StoredDocument

__all__ = [
    "Settings",
    "get_settings",
    "logger",
    "TaskManagerError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "PartialFailureError",
    "DocumentStoreError",
    "IDocumentStore",
    "StoredDocument",
]
