"""
Interface for Task Service.
Defines the contract that all task services must implement.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from repositories.models import TaskCreate, TaskUpdate
from services.dates import DateLike
from services.results import ServiceResult


class ITaskService(ABC):
    """Interface for task service operations."""

    @abstractmethod
    async def get_tasks_by_user(self, user_id: str) -> ServiceResult:
        """
        Get every task of a user across all folders.

        Args:
            user_id: Owner of the tasks

        Returns:
            ServiceResult: Envelope whose data is a flat task list
        """
        pass

    @abstractmethod
    async def get_tasks_in_folder(
        self, user_id: str, folder_id: str, order_field: Optional[str] = None
    ) -> ServiceResult:
        """
        Get a folder's tasks grouped by status.

        Args:
            user_id: Owner of the folder
            folder_id: Folder id
            order_field: Field to sort by, defaults to the configured one

        Returns:
            ServiceResult: Envelope whose data is the status buckets
        """
        pass

    @abstractmethod
    async def get_task(self, user_id: str, folder_id: str, task_id: str) -> ServiceResult:
        pass

    @abstractmethod
    async def get_tasks_by_date(self, user_id: str, day: Optional[DateLike]) -> ServiceResult:
        """
        Get all tasks starting on the given day.

        Returns:
            ServiceResult: Envelope whose data is a flat task list
        """
        pass

    @abstractmethod
    async def get_tasks_by_date_in_folder(
        self, user_id: str, folder_id: str, day: Optional[DateLike]
    ) -> ServiceResult:
        pass

    @abstractmethod
    async def get_nearing_due_tasks(
        self,
        user_id: str,
        threshold_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult:
        """
        Get open tasks due within the look-ahead window.

        Args:
            user_id: Owner of the tasks
            threshold_days: Window size in days, defaults to the configured one
            now: Reference instant, defaults to the current time

        Returns:
            ServiceResult: Envelope whose data is sorted by end date
        """
        pass

    @abstractmethod
    async def create_task(
        self,
        user_id: str,
        folder_id: str,
        task: Union[TaskCreate, Mapping[str, Any], None],
    ) -> ServiceResult:
        pass

    @abstractmethod
    async def update_task(
        self,
        user_id: str,
        folder_id: str,
        task_id: str,
        task: Union[TaskUpdate, Mapping[str, Any], None],
    ) -> ServiceResult:
        pass

    @abstractmethod
    async def delete_task(self, user_id: str, folder_id: str, task_id: str) -> ServiceResult:
        pass
