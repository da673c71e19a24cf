"""
Interface for Task Folder Repository.
Defines the contract that all task folder repositories must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from repositories.models import (
    TaskFolderCreate,
    TaskFolderModel,
    TaskFolderUpdate,
    TaskFolderWithStats,
)


class ITaskFolderRepository(ABC):
    """Interface for task folder repository operations."""

    @abstractmethod
    async def list_folders(self, user_id: str) -> List[TaskFolderWithStats]:
        """
        List the user's folders with total and completed task counts.

        Args:
            user_id: Owner of the folders

        Returns:
            List[TaskFolderWithStats]: Folders, empty if the user has none
        """
        pass

    @abstractmethod
    async def get_folder(self, user_id: str, folder_id: str) -> Optional[TaskFolderModel]:
        """
        Find a folder by id.

        Returns:
            Optional[TaskFolderModel]: Folder if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_folder(self, user_id: str, folder: TaskFolderCreate) -> TaskFolderModel:
        """
        Create a folder.

        Returns:
            TaskFolderModel: The persisted folder including its generated id
        """
        pass

    @abstractmethod
    async def update_folder(
        self, user_id: str, folder_id: str, fields: TaskFolderUpdate
    ) -> TaskFolderModel:
        """
        Merge the supplied fields into a folder.

        Returns:
            TaskFolderModel: The folder after the update
        """
        pass

    @abstractmethod
    async def delete_folder(self, user_id: str, folder_id: str) -> int:
        """
        Delete a folder and all of its tasks.

        Returns:
            int: Number of documents removed
        """
        pass
