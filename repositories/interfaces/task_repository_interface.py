"""
Interface for Task Repository.
Defines the contract that all task repositories must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from repositories.models import (
    TaskBuckets,
    TaskCreate,
    TaskFolderModel,
    TaskModel,
    TaskUpdate,
)


class ITaskRepository(ABC):
    """Interface for task repository operations."""

    @abstractmethod
    async def list_tasks_grouped_by_folder(
        self, user_id: str
    ) -> List[Tuple[TaskFolderModel, List[TaskModel]]]:
        """
        Read every folder's tasks concurrently.

        Returns:
            List of (folder, tasks) pairs
        """
        pass

    @abstractmethod
    async def list_all_tasks_for_user(self, user_id: str) -> List[TaskModel]:
        """
        List all tasks of the user across folders.

        Returns:
            List[TaskModel]: Flat task list
        """
        pass

    @abstractmethod
    async def list_tasks_in_folder(
        self, user_id: str, folder_id: str, order_field: Optional[str] = None
    ) -> TaskBuckets:
        """
        List a folder's tasks partitioned by status.

        Args:
            user_id: Owner of the folder
            folder_id: Folder id
            order_field: Field to sort by (ascending)

        Returns:
            TaskBuckets: pending / in_progress / completed
        """
        pass

    @abstractmethod
    async def get_task(self, user_id: str, folder_id: str, task_id: str) -> Optional[TaskModel]:
        """
        Find a task by id.

        Returns:
            Optional[TaskModel]: Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_task(self, user_id: str, folder_id: str, task: TaskCreate) -> TaskModel:
        """
        Create a task in a folder.

        Returns:
            TaskModel: The persisted task including its generated id
        """
        pass

    @abstractmethod
    async def update_task(
        self, user_id: str, folder_id: str, task_id: str, fields: TaskUpdate
    ) -> TaskModel:
        """
        Merge the supplied fields into a task.

        Returns:
            TaskModel: The task after the update
        """
        pass

    @abstractmethod
    async def delete_task(self, user_id: str, folder_id: str, task_id: str) -> bool:
        """
        Delete a task.

        Returns:
            bool: True if the task existed
        """
        pass
