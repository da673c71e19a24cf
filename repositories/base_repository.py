"""
Base repository with the shared store plumbing.
Follows Single Responsibility Principle - only handles data access.
"""

import asyncio
from abc import ABC
from typing import Awaitable, Dict, List, Optional, TypeVar

from core import logger
from core.document_store import IDocumentStore, StoredDocument
from core.errors import PartialFailureError, PersistenceError, TaskManagerError

T = TypeVar("T")


class BaseRepository(ABC):
    """
    Base repository holding an injected document store.
    All repositories should inherit from this class.
    """

    def __init__(self, store: IDocumentStore):
        """
        Initialize repository with a document store.

        Args:
            store: Document store implementation
        """
        self.store = store

    @staticmethod
    def _wrap(operation: str, error: Exception) -> TaskManagerError:
        """
        Translate an exception raised inside `operation`.
        Domain errors pass through; anything else becomes a PersistenceError.
        """
        if isinstance(error, TaskManagerError):
            return error
        logger.error(f"❌ {operation} failed: {error}")
        return PersistenceError(operation, cause=error)

    async def _get(self, operation: str, path: str) -> Optional[StoredDocument]:
        try:
            return await self.store.get(path)
        except Exception as e:
            raise self._wrap(operation, e) from e

    async def _list(
        self, operation: str, collection_path: str, order_field: Optional[str] = None
    ) -> List[StoredDocument]:
        try:
            if order_field:
                return await self.store.order_by(collection_path, order_field, "asc")
            return await self.store.list(collection_path)
        except Exception as e:
            raise self._wrap(operation, e) from e

    async def _fan_out(
        self, operation: str, branches: Dict[str, Awaitable[T]]
    ) -> Dict[str, T]:
        """
        Run independent branches concurrently and join them.

        Every branch is awaited before a result is produced. If any branch
        failed the whole call fails with PartialFailureError; no branch's
        result is ever silently dropped.

        Args:
            operation: Name used in logs and errors
            branches: Branch key (folder id) to awaitable

        Returns:
            Branch key to result, in the order given
        """
        keys = list(branches)
        results = await asyncio.gather(
            *(branches[key] for key in keys), return_exceptions=True
        )

        failures = {
            key: result
            for key, result in zip(keys, results)
            if isinstance(result, BaseException)
        }
        if failures:
            for key, failure in failures.items():
                logger.error(f"❌ {operation}: branch {key} failed: {failure}")
            raise PartialFailureError(operation, failures)

        logger.debug(f"{operation}: joined {len(keys)} branches")
        return dict(zip(keys, results))
