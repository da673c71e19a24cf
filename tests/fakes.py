# tests/fakes.py

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.document_store import (
    DocumentStoreError,
    IDocumentStore,
    StoredDocument,
    document_id,
    parent_path,
    path_depth,
)
from repositories.paths import folder_path, task_path


class InMemoryDocumentStore(IDocumentStore):
    """
    Dict-backed document store for unit tests.

    - Keeps documents keyed by full path
    - Hands out copies so callers cannot mutate stored state
    - Counts writes for "nothing was written" assertions
    """

    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.writes = 0
        self._next_id = 0

    def _doc(self, path: str) -> StoredDocument:
        return StoredDocument(
            id=document_id(path), path=path, data=copy.deepcopy(self.documents[path])
        )

    def _children(self, collection_path: str) -> List[str]:
        return [p for p in self.documents if parent_path(p) == collection_path]

    def put(self, path: str, data: Dict[str, Any]) -> None:
        """Seed a document at an explicit path."""
        self.documents[path] = copy.deepcopy(data)

    async def get(self, path: str) -> Optional[StoredDocument]:
        if path not in self.documents:
            return None
        return self._doc(path)

    async def list(self, collection_path: str) -> List[StoredDocument]:
        return [self._doc(p) for p in self._children(collection_path)]

    async def order_by(
        self, collection_path: str, field: str, direction: str = "asc"
    ) -> List[StoredDocument]:
        docs = await self.list(collection_path)
        present = [d for d in docs if d.data.get(field) is not None]
        missing = [d for d in docs if d.data.get(field) is None]
        present.sort(key=lambda d: d.data[field], reverse=direction == "desc")
        return present + missing

    async def add(self, collection_path: str, data: Dict[str, Any]) -> str:
        self._next_id += 1
        new_id = f"doc{self._next_id:04d}"
        self.documents[f"{collection_path}/{new_id}"] = copy.deepcopy(data)
        self.writes += 1
        return new_id

    async def update(self, path: str, partial_data: Dict[str, Any]) -> bool:
        if path not in self.documents:
            return False
        self.documents[path].update(copy.deepcopy(partial_data))
        self.writes += 1
        return True

    async def delete(self, path: str) -> bool:
        self.writes += 1
        return self.documents.pop(path, None) is not None

    def _subtree(self, path: str) -> List[str]:
        below = [p for p in self.documents if p.startswith(path + "/")]
        below.sort(key=path_depth, reverse=True)
        if path in self.documents:
            below.append(path)
        return below

    async def recursive_delete(self, path: str) -> int:
        removed = 0
        for p in self._subtree(path):
            del self.documents[p]
            removed += 1
        self.writes += removed
        return removed


class FailingDocumentStore(InMemoryDocumentStore):
    """
    InMemoryDocumentStore that raises DocumentStoreError on demand.

    - fail_lists: collection paths whose list/order_by calls fail
    - fail_adds / fail_updates / fail_gets: make every call of that kind fail
    - recursive_delete_failures: number of recursive_delete calls that fail,
      each after removing up to recursive_delete_partial documents
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_lists: set = set()
        self.fail_adds = False
        self.fail_updates = False
        self.fail_gets = False
        self.recursive_delete_failures = 0
        self.recursive_delete_partial = 0
        self.recursive_delete_calls = 0

    async def get(self, path: str) -> Optional[StoredDocument]:
        if self.fail_gets:
            raise DocumentStoreError(f"get {path} unavailable")
        return await super().get(path)

    async def list(self, collection_path: str) -> List[StoredDocument]:
        if collection_path in self.fail_lists:
            raise DocumentStoreError(f"list {collection_path} unavailable")
        return await super().list(collection_path)

    async def add(self, collection_path: str, data: Dict[str, Any]) -> str:
        if self.fail_adds:
            raise DocumentStoreError(f"add to {collection_path} unavailable")
        return await super().add(collection_path, data)

    async def update(self, path: str, partial_data: Dict[str, Any]) -> bool:
        if self.fail_updates:
            raise DocumentStoreError(f"update {path} unavailable")
        return await super().update(path, partial_data)

    async def recursive_delete(self, path: str) -> int:
        self.recursive_delete_calls += 1
        if self.recursive_delete_failures > 0:
            self.recursive_delete_failures -= 1
            for p in self._subtree(path)[: self.recursive_delete_partial]:
                del self.documents[p]
            raise DocumentStoreError(f"recursive_delete {path} interrupted")
        return await super().recursive_delete(path)


class VanishingDocumentStore(InMemoryDocumentStore):
    """Accepts writes but never returns the written document (lost write)."""

    async def add(self, collection_path: str, data: Dict[str, Any]) -> str:
        self._next_id += 1
        self.writes += 1
        return f"lost{self._next_id:04d}"


USER_ID = "user-1"
NOW = datetime(2025, 11, 3, 12, 0, 0)


def seed_folder(store: InMemoryDocumentStore, folder_id: str, title: str, **data: Any) -> str:
    store.put(
        folder_path(USER_ID, folder_id),
        {"title": title, "description": None, "user_id": USER_ID, "is_deleted": False, **data},
    )
    return folder_id


def seed_task(
    store: InMemoryDocumentStore, folder_id: str, task_id: str, title: str, **data: Any
) -> str:
    store.put(
        task_path(USER_ID, folder_id, task_id),
        {
            "title": title,
            "description": f"{title} details",
            "status": "pending",
            "priority": "medium",
            "task_folder_id": folder_id,
            **data,
        },
    )
    return task_id
