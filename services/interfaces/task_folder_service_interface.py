"""
Interface for Task Folder Service.
Defines the contract that all task folder services must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Union

from repositories.models import TaskFolderCreate, TaskFolderUpdate
from services.results import ServiceResult


class ITaskFolderService(ABC):
    """Interface for task folder service operations."""

    @abstractmethod
    async def get_task_folders(self, user_id: str) -> ServiceResult:
        """
        Get the user's folders with task statistics.

        Args:
            user_id: Owner of the folders

        Returns:
            ServiceResult: Envelope whose data is a list of folders
        """
        pass

    @abstractmethod
    async def get_task_folder(self, user_id: str, folder_id: str) -> ServiceResult:
        pass

    @abstractmethod
    async def create_task_folder(
        self, user_id: str, folder: Union[TaskFolderCreate, Mapping[str, Any], None]
    ) -> ServiceResult:
        """
        Create a folder.

        Returns:
            ServiceResult: Envelope whose data is the stored folder
        """
        pass

    @abstractmethod
    async def update_task_folder(
        self,
        user_id: str,
        folder_id: str,
        folder: Union[TaskFolderUpdate, Mapping[str, Any], None],
    ) -> ServiceResult:
        pass

    @abstractmethod
    async def delete_task_folder(self, user_id: str, folder_id: str) -> ServiceResult:
        """
        Delete a folder and its whole subtree.

        Returns:
            ServiceResult: Envelope whose data holds the number of removed documents
        """
        pass
