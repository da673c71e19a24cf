"""
Task folder repository.
Includes logging and error handling for all folder operations.
"""

from typing import List, Optional

from core import logger
from core.config import get_settings
from core.document_store import IDocumentStore, StoredDocument
from core.errors import NotFoundError, PersistenceError
from repositories.base_repository import BaseRepository
from repositories.interfaces import ITaskFolderRepository
from repositories.models import (
    TaskFolderCreate,
    TaskFolderModel,
    TaskFolderUpdate,
    TaskFolderWithStats,
    TaskStatus,
    normalize_status,
)
from repositories.paths import folder_path, folders_path, tasks_path


class TaskFolderRepository(BaseRepository, ITaskFolderRepository):
    """Repository for per-user task folders."""

    def __init__(self, store: IDocumentStore, max_retries: Optional[int] = None):
        super().__init__(store)
        if max_retries is None:
            max_retries = get_settings().store_max_retries
        self.max_retries = max(1, max_retries)
        logger.debug("TaskFolderRepository initialized")

    async def list_folders(self, user_id: str) -> List[TaskFolderWithStats]:
        """
        Get all folders of the user with task statistics.

        Counts are computed from a full read of each folder's task
        collection; folders are read concurrently.

        Args:
            user_id: Owner of the folders

        Returns:
            Folders with total_tasks and completed_tasks_count
            (empty list when the user has no folders)

        Raises:
            PersistenceError: If the folder listing fails
            PartialFailureError: If any folder's task read fails
        """
        logger.debug(f"🔍 Listing folders: user_id={user_id}")
        folder_docs = await self._list("list_folders", folders_path(user_id))

        if not folder_docs:
            logger.info(f"No folders for user_id={user_id}")
            return []

        branches = {
            doc.id: self._with_stats(user_id, doc) for doc in folder_docs
        }
        folders = await self._fan_out("list_folders", branches)

        logger.info(f"✅ Found {len(folders)} folders for user_id={user_id}")
        return list(folders.values())

    async def _with_stats(
        self, user_id: str, folder_doc: StoredDocument
    ) -> TaskFolderWithStats:
        task_docs = await self._list(
            "count_folder_tasks", tasks_path(user_id, folder_doc.id)
        )
        completed = sum(
            1
            for doc in task_docs
            if normalize_status(doc.data.get("status")) is TaskStatus.COMPLETED
        )
        return TaskFolderWithStats(
            **{
                **folder_doc.data,
                "id": folder_doc.id,
                "total_tasks": len(task_docs),
                "completed_tasks_count": completed,
            }
        )

    async def get_folder(self, user_id: str, folder_id: str) -> Optional[TaskFolderModel]:
        """
        Get a folder by id.

        Returns:
            The folder, or None if it does not exist
        """
        doc = await self._get("get_folder", folder_path(user_id, folder_id))
        if doc is None:
            logger.warning(f"⚠️ Folder not found: user_id={user_id}, folder_id={folder_id}")
            return None
        return TaskFolderModel.from_document(doc)

    async def create_folder(
        self, user_id: str, folder: TaskFolderCreate
    ) -> TaskFolderModel:
        """
        Create a folder and return it as persisted, including its new id.

        Raises:
            PersistenceError: If the write fails or the folder cannot be read back
        """
        logger.info(f"📝 Creating folder: user_id={user_id}, title={folder.title}")
        try:
            folder_id = await self.store.add(
                folders_path(user_id), folder.to_document(user_id)
            )
        except Exception as e:
            raise self._wrap("create_folder", e) from e

        doc = await self._get("create_folder", folder_path(user_id, folder_id))
        if doc is None:
            logger.error(f"❌ Folder missing after write: folder_id={folder_id}")
            raise PersistenceError(
                "create_folder",
                message="Failed to create task folder. Please try again later.",
            )

        logger.info(f"✅ Folder created: folder_id={folder_id}")
        return TaskFolderModel.from_document(doc)

    async def update_folder(
        self, user_id: str, folder_id: str, fields: TaskFolderUpdate
    ) -> TaskFolderModel:
        """
        Merge the supplied fields into a folder.

        Raises:
            NotFoundError: If the folder does not exist
        """
        path = folder_path(user_id, folder_id)
        update_dict = fields.to_update_dict()
        logger.info(f"📝 Updating folder: folder_id={folder_id}, fields={list(update_dict)}")

        try:
            matched = await self.store.update(path, update_dict)
        except Exception as e:
            raise self._wrap("update_folder", e) from e

        if not matched:
            logger.warning(f"⚠️ Folder not found for update: folder_id={folder_id}")
            raise NotFoundError(f"Task folder not found: {folder_id}")

        doc = await self._get("update_folder", path)
        if doc is None:
            raise NotFoundError(f"Task folder not found: {folder_id}")
        return TaskFolderModel.from_document(doc)

    async def delete_folder(self, user_id: str, folder_id: str) -> int:
        """
        Delete a folder and every task beneath it.

        The recursive delete is retried on store failure; each attempt
        resumes from whatever the previous one left behind.

        Returns:
            Number of documents removed

        Raises:
            NotFoundError: If nothing existed at the folder path
            PersistenceError: If every attempt failed
        """
        path = folder_path(user_id, folder_id)
        logger.warning(f"🗑️ Deleting folder: folder_id={folder_id}")

        removed = 0
        failed_attempts = 0
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                removed = await self.store.recursive_delete(path)
                last_error = None
                break
            except Exception as e:
                failed_attempts += 1
                last_error = e
                logger.warning(
                    f"⚠️ Recursive delete attempt {attempt}/{self.max_retries} "
                    f"failed for folder_id={folder_id}: {e}"
                )

        if last_error is not None:
            raise self._wrap("delete_folder", last_error) from last_error

        # A failed attempt may already have removed part of the subtree
        if removed == 0 and failed_attempts == 0:
            logger.warning(f"⚠️ Folder not found for deletion: folder_id={folder_id}")
            raise NotFoundError(f"Task folder not found: {folder_id}")

        logger.info(f"✅ Folder deleted: folder_id={folder_id}, documents={removed}")
        return removed
