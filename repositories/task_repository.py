"""
Task repository.
Includes logging and error handling for all task operations, status
bucketing and the per-folder concurrent fan-out.
"""

from typing import List, Optional, Tuple

from core import logger
from core.config import get_settings
from core.document_store import IDocumentStore
from core.errors import NotFoundError, PersistenceError
from repositories.base_repository import BaseRepository
from repositories.interfaces import ITaskRepository
from repositories.models import (
    TaskBuckets,
    TaskCreate,
    TaskFolderModel,
    TaskModel,
    TaskUpdate,
)
from repositories.paths import folder_path, folders_path, task_path, tasks_path


class TaskRepository(BaseRepository, ITaskRepository):
    """Repository for tasks stored under each folder."""

    def __init__(self, store: IDocumentStore, default_order_field: Optional[str] = None):
        super().__init__(store)
        self.default_order_field = default_order_field or get_settings().task_order_field
        logger.debug("TaskRepository initialized")

    async def _require_folder(
        self, operation: str, user_id: str, folder_id: str
    ) -> TaskFolderModel:
        doc = await self._get(operation, folder_path(user_id, folder_id))
        if doc is None:
            logger.warning(f"⚠️ Folder not found: user_id={user_id}, folder_id={folder_id}")
            raise NotFoundError(f"Task folder not found: {folder_id}")
        return TaskFolderModel.from_document(doc)

    async def _folder_tasks(
        self, user_id: str, folder: TaskFolderModel
    ) -> List[TaskModel]:
        docs = await self._list("list_folder_tasks", tasks_path(user_id, folder.id))
        return [TaskModel.from_document(doc, folder_source=folder.title) for doc in docs]

    async def list_tasks_grouped_by_folder(
        self, user_id: str
    ) -> List[Tuple[TaskFolderModel, List[TaskModel]]]:
        """
        Read every folder's tasks concurrently.

        Args:
            user_id: Owner of the folders

        Returns:
            (folder, tasks) pairs in folder listing order

        Raises:
            PartialFailureError: If any folder's read failed
        """
        logger.debug(f"🔍 Fan-out read of all folders: user_id={user_id}")
        folder_docs = await self._list("list_folders", folders_path(user_id))
        folders = {doc.id: TaskFolderModel.from_document(doc) for doc in folder_docs}

        results = await self._fan_out(
            "list_tasks_by_folder",
            {
                folder_id: self._folder_tasks(user_id, folder)
                for folder_id, folder in folders.items()
            },
        )
        return [(folders[folder_id], tasks) for folder_id, tasks in results.items()]

    async def list_all_tasks_for_user(self, user_id: str) -> List[TaskModel]:
        """
        Get all tasks of the user across every folder.

        Returns:
            Flat list of tasks (empty when the user has no tasks)

        Raises:
            PartialFailureError: If any folder's read failed
        """
        grouped = await self.list_tasks_grouped_by_folder(user_id)
        tasks = [task for _, folder_tasks in grouped for task in folder_tasks]
        logger.info(
            f"✅ Found {len(tasks)} tasks in {len(grouped)} folders for user_id={user_id}"
        )
        return tasks

    async def list_tasks_in_folder(
        self, user_id: str, folder_id: str, order_field: Optional[str] = None
    ) -> TaskBuckets:
        """
        Get the tasks of one folder partitioned by status.

        Tasks are read in ascending `order_field` order and keep that order
        inside each bucket. Each task carries the folder title as
        folder_source.

        Raises:
            NotFoundError: If the folder does not exist
        """
        order_field = order_field or self.default_order_field
        folder = await self._require_folder("list_tasks_in_folder", user_id, folder_id)

        docs = await self._list(
            "list_tasks_in_folder", tasks_path(user_id, folder_id), order_field
        )

        buckets = TaskBuckets()
        for doc in docs:
            buckets.add(TaskModel.from_document(doc, folder_source=folder.title))

        logger.info(
            f"✅ Folder {folder_id}: pending={len(buckets.pending)}, "
            f"in_progress={len(buckets.in_progress)}, completed={len(buckets.completed)}"
        )
        return buckets

    async def get_task(
        self, user_id: str, folder_id: str, task_id: str
    ) -> Optional[TaskModel]:
        """
        Get a task by id.

        Returns:
            The task, or None if it does not exist
        """
        doc = await self._get("get_task", task_path(user_id, folder_id, task_id))
        if doc is None:
            logger.warning(f"⚠️ Task not found: folder_id={folder_id}, task_id={task_id}")
            return None
        return TaskModel.from_document(doc)

    async def create_task(
        self, user_id: str, folder_id: str, task: TaskCreate
    ) -> TaskModel:
        """
        Create a task in a folder and return it as persisted.

        Raises:
            NotFoundError: If the folder does not exist
            PersistenceError: If the write fails or cannot be read back
        """
        folder = await self._require_folder("create_task", user_id, folder_id)
        logger.info(f"📝 Creating task: folder_id={folder_id}, title={task.title}")

        try:
            task_id = await self.store.add(
                tasks_path(user_id, folder_id), task.to_document(folder_id)
            )
        except Exception as e:
            raise self._wrap("create_task", e) from e

        doc = await self._get("create_task", task_path(user_id, folder_id, task_id))
        if doc is None:
            raise PersistenceError(
                "create_task", message="Failed to create task. Please try again later."
            )

        logger.info(f"✅ Task created: task_id={task_id}")
        return TaskModel.from_document(doc, folder_source=folder.title)

    async def update_task(
        self, user_id: str, folder_id: str, task_id: str, fields: TaskUpdate
    ) -> TaskModel:
        """
        Merge the supplied fields into a task.

        Raises:
            NotFoundError: If the task does not exist
        """
        path = task_path(user_id, folder_id, task_id)
        update_dict = fields.to_update_dict()
        logger.info(f"📝 Updating task: task_id={task_id}, fields={list(update_dict)}")

        try:
            matched = await self.store.update(path, update_dict)
        except Exception as e:
            raise self._wrap("update_task", e) from e

        if not matched:
            logger.warning(f"⚠️ Task not found for update: task_id={task_id}")
            raise NotFoundError(f"Task not found: {task_id}")

        doc = await self._get("update_task", path)
        if doc is None:
            raise NotFoundError(f"Task not found: {task_id}")
        return TaskModel.from_document(doc)

    async def delete_task(self, user_id: str, folder_id: str, task_id: str) -> bool:
        """
        Delete a task.

        Returns:
            True if the task existed and was removed
        """
        logger.warning(f"🗑️ Deleting task: folder_id={folder_id}, task_id={task_id}")
        try:
            deleted = await self.store.delete(task_path(user_id, folder_id, task_id))
        except Exception as e:
            raise self._wrap("delete_task", e) from e

        if deleted:
            logger.info(f"✅ Task deleted: task_id={task_id}")
        else:
            logger.warning(f"⚠️ Task not found for deletion: task_id={task_id}")
        return deleted
