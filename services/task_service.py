"""
Task service.
Validates task requests, delegates reads to the repository and the
aggregation engine, and shapes every outcome into a result envelope.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from core import logger
from core.errors import NotFoundError
from repositories.interfaces import ITaskRepository
from repositories.models import TaskCreate, TaskUpdate
from services.dates import DateLike
from services.interfaces import ITaskService
from services.results import ServiceResult, failure_result, success_result
from services.task_aggregation import TaskAggregationEngine
from services.validation import (
    require_id,
    validate_day,
    validate_task_create,
    validate_task_update,
    validate_threshold_days,
)


class TaskService(ITaskService):
    """Handles business logic of task requests."""

    def __init__(
        self,
        task_repository: ITaskRepository,
        aggregation_engine: Optional[TaskAggregationEngine] = None,
    ):
        self.task_repository = task_repository
        self.aggregation_engine = aggregation_engine or TaskAggregationEngine(
            task_repository
        )
        logger.debug("TaskService initialized")

    async def get_tasks_by_user(self, user_id: str) -> ServiceResult:
        """Fetch every task of the user across all folders."""
        try:
            user_id = require_id(user_id, "User id")
            tasks = await self.task_repository.list_all_tasks_for_user(user_id)
            return success_result("Tasks successfully retrieved", tasks)
        except Exception as e:
            return failure_result("Error fetching tasks", e)

    async def get_tasks_in_folder(
        self, user_id: str, folder_id: str, order_field: Optional[str] = None
    ) -> ServiceResult:
        """Fetch one folder's tasks grouped into pending / in progress / completed."""
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")

            buckets = await self.task_repository.list_tasks_in_folder(
                user_id, folder_id, order_field
            )
            return success_result("Tasks successfully retrieved", buckets)
        except Exception as e:
            return failure_result("Error fetching tasks in folder", e)

    async def get_task(self, user_id: str, folder_id: str, task_id: str) -> ServiceResult:
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            task_id = require_id(task_id, "Task id")

            task = await self.task_repository.get_task(user_id, folder_id, task_id)
            if task is None:
                raise NotFoundError(f"Task not found: {task_id}")
            return success_result("Task successfully retrieved", task)
        except Exception as e:
            return failure_result("Error fetching task", e)

    async def get_tasks_by_date(self, user_id: str, day: Optional[DateLike]) -> ServiceResult:
        """
        Fetch all tasks whose start date falls on the selected day.

        Args:
            user_id: UID of the user
            day: Selected day (date, datetime or ISO string)
        """
        try:
            user_id = require_id(user_id, "User id")
            day = validate_day(day)

            tasks = await self.aggregation_engine.tasks_by_date(user_id, day)
            return success_result("Tasks of selected date successfully retrieved", tasks)
        except Exception as e:
            return failure_result("Error fetching tasks of selected date", e)

    async def get_tasks_by_date_in_folder(
        self, user_id: str, folder_id: str, day: Optional[DateLike]
    ) -> ServiceResult:
        """Fetch a folder's tasks on the selected day, grouped by status."""
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            day = validate_day(day)

            buckets = await self.aggregation_engine.tasks_by_date_in_folder(
                user_id, folder_id, day
            )
            return success_result("Tasks of selected date successfully retrieved", buckets)
        except Exception as e:
            return failure_result("Error fetching tasks of selected date in folder", e)

    async def get_nearing_due_tasks(
        self,
        user_id: str,
        threshold_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult:
        """Fetch open tasks whose end date is within the look-ahead window."""
        try:
            user_id = require_id(user_id, "User id")
            if threshold_days is not None:
                threshold_days = validate_threshold_days(threshold_days)

            tasks = await self.aggregation_engine.nearing_due_tasks(
                user_id, threshold_days=threshold_days, now=now
            )
            return success_result("Nearing due tasks successfully retrieved", tasks)
        except Exception as e:
            return failure_result("Error fetching nearing due tasks", e)

    async def create_task(
        self,
        user_id: str,
        folder_id: str,
        task: Union[TaskCreate, Mapping[str, Any], None],
    ) -> ServiceResult:
        """
        Create a task in a folder.
        Returns an error if title or description is empty, status or
        priority is unknown, or end date precedes start date.
        """
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            task = validate_task_create(task)

            created = await self.task_repository.create_task(user_id, folder_id, task)
            return success_result("Successfully created task.", created)
        except Exception as e:
            return failure_result("Error creating task", e)

    async def update_task(
        self,
        user_id: str,
        folder_id: str,
        task_id: str,
        task: Union[TaskUpdate, Mapping[str, Any], None],
    ) -> ServiceResult:
        """
        Update the supplied fields of a task.
        Omitted fields are untouched; an explicit empty title or description
        is rejected.
        """
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            task_id = require_id(task_id, "Task id")
            task = validate_task_update(task)

            updated = await self.task_repository.update_task(
                user_id, folder_id, task_id, task
            )
            return success_result("Successfully updated task.", updated)
        except Exception as e:
            return failure_result("Error updating task", e)

    async def delete_task(self, user_id: str, folder_id: str, task_id: str) -> ServiceResult:
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            task_id = require_id(task_id, "Task id")

            deleted = await self.task_repository.delete_task(user_id, folder_id, task_id)
            if not deleted:
                raise NotFoundError(f"Task not found: {task_id}")
            return success_result("Successfully deleted task")
        except Exception as e:
            return failure_result("Error deleting task", e)
