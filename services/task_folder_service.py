"""
Task folder service.
Validates folder requests and shapes repository results into envelopes.
"""

from typing import Any, Mapping, Union

from core import logger
from core.errors import NotFoundError
from repositories.interfaces import ITaskFolderRepository
from repositories.models import TaskFolderCreate, TaskFolderUpdate
from services.interfaces import ITaskFolderService
from services.results import ServiceResult, failure_result, success_result
from services.validation import require_id, validate_folder_create, validate_folder_update


class TaskFolderService(ITaskFolderService):
    """Handles business logic of task folder requests."""

    def __init__(self, task_folder_repository: ITaskFolderRepository):
        self.task_folder_repository = task_folder_repository
        logger.debug("TaskFolderService initialized")

    async def get_task_folders(self, user_id: str) -> ServiceResult:
        """
        Fetch the user's folders with task statistics.

        An empty list is a success, not an error.
        """
        try:
            user_id = require_id(user_id, "User id")
            folders = await self.task_folder_repository.list_folders(user_id)

            if not folders:
                return success_result("No task folders found", [])
            return success_result("Task folders successfully retrieved", folders)
        except Exception as e:
            return failure_result("Error fetching task folders", e)

    async def get_task_folder(self, user_id: str, folder_id: str) -> ServiceResult:
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")

            folder = await self.task_folder_repository.get_folder(user_id, folder_id)
            if folder is None:
                raise NotFoundError(f"Task folder not found: {folder_id}")
            return success_result("Task folder successfully retrieved", folder)
        except Exception as e:
            return failure_result("Error fetching task folder", e)

    async def create_task_folder(
        self, user_id: str, folder: Union[TaskFolderCreate, Mapping[str, Any], None]
    ) -> ServiceResult:
        """
        Create a folder for the user.
        Returns an error if the title is empty.
        """
        try:
            user_id = require_id(user_id, "User id")
            folder = validate_folder_create(folder)

            created = await self.task_folder_repository.create_folder(user_id, folder)
            return success_result("Successfully created task folder.", created)
        except Exception as e:
            return failure_result("Error creating task folder", e)

    async def update_task_folder(
        self,
        user_id: str,
        folder_id: str,
        folder: Union[TaskFolderUpdate, Mapping[str, Any], None],
    ) -> ServiceResult:
        """
        Update the supplied fields of a folder.
        Errors if the title is set to an empty value.
        """
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")
            folder = validate_folder_update(folder)

            updated = await self.task_folder_repository.update_folder(
                user_id, folder_id, folder
            )
            return success_result("Successfully updated task folder.", updated)
        except Exception as e:
            return failure_result("Error updating task folder", e)

    async def delete_task_folder(self, user_id: str, folder_id: str) -> ServiceResult:
        """Delete a folder together with all of its tasks."""
        try:
            user_id = require_id(user_id, "User id")
            folder_id = require_id(folder_id, "Task folder id")

            removed = await self.task_folder_repository.delete_folder(user_id, folder_id)
            return success_result(
                "Successfully deleted task folder", {"deleted_documents": removed}
            )
        except Exception as e:
            return failure_result("Error deleting task folder", e)
