"""
Document store contract.
Repositories only talk to the store through this interface, so any
implementation (MongoDB, in-memory) can be injected.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class DocumentStoreError(Exception):
    """Generic I/O failure raised by a document store implementation."""


@dataclass
class StoredDocument:
    """A document read from the store."""

    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)


def join_path(*segments: str) -> str:
    """Join path segments, rejecting empty ones and embedded separators."""
    for segment in segments:
        if not segment or "/" in segment:
            raise ValueError(f"Invalid path segment: {segment!r}")
    return "/".join(segments)


def parent_path(path: str) -> str:
    """Collection path that holds the document at `path`."""
    return path.rsplit("/", 1)[0] if "/" in path else ""


def document_id(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def path_depth(path: str) -> int:
    return path.count("/") + 1


class IDocumentStore(ABC):
    """Interface for hierarchical document stores."""

    @abstractmethod
    async def get(self, path: str) -> Optional[StoredDocument]:
        """
        Read one document.

        Args:
            path: Full document path

        Returns:
            The document, or None when it does not exist
        """
        pass

    @abstractmethod
    async def list(self, collection_path: str) -> List[StoredDocument]:
        """
        Read every document directly inside a collection.

        Args:
            collection_path: Collection path

        Returns:
            List of documents (empty when the collection is empty)
        """
        pass

    @abstractmethod
    async def order_by(
        self, collection_path: str, field: str, direction: str = "asc"
    ) -> List[StoredDocument]:
        """
        Read a collection sorted by a field.
        Documents missing the field are still returned.

        Args:
            collection_path: Collection path
            field: Field to sort by
            direction: "asc" or "desc"
        """
        pass

    @abstractmethod
    async def add(self, collection_path: str, data: Dict[str, Any]) -> str:
        """
        Add a document with a store-assigned id.

        Returns:
            The generated document id
        """
        pass

    @abstractmethod
    async def update(self, path: str, partial_data: Dict[str, Any]) -> bool:
        """
        Merge fields into an existing document.

        Returns:
            False if the document does not exist
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete one document.

        Returns:
            True if a document was removed
        """
        pass

    async def health_check(self) -> bool:
        """Whether the store is reachable. Stores without a remote backend are always healthy."""
        return True

    @abstractmethod
    async def recursive_delete(self, path: str) -> int:
        """
        Delete a document and every document below it, deepest first.
        Running it again on a partially deleted subtree finishes the job.

        Returns:
            Number of documents removed
        """
        pass
