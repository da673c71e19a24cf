"""
Task Folder API Routes.
"""

from fastapi import APIRouter, Body, Depends, status

from core.logger import logger
from internal.api.dependencies.auth import get_user_id
from internal.api.schemas import (
    StandardResponse,
    TaskFolderCreateRequest,
    TaskFolderUpdateRequest,
)
from internal.api.utils import to_response
from services.interfaces import ITaskFolderService

_ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": StandardResponse},
    401: {"description": "Missing X-User-Id header", "model": StandardResponse},
    404: {"description": "Task folder not found", "model": StandardResponse},
    500: {"description": "Internal server error", "model": StandardResponse},
}


def create_task_folder_routes(task_folder_service: ITaskFolderService) -> APIRouter:
    """
    Factory function to create task folder routes with dependency injection.

    Args:
        task_folder_service: Implementation of ITaskFolderService

    Returns:
        APIRouter: Configured router with all folder endpoints
    """
    router = APIRouter(prefix="/api/v1/task", tags=["Task Folders"])

    @router.post(
        "/folders",
        response_model=StandardResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Create Task Folder",
        description="Create a new task folder for the user",
        responses=_ERROR_RESPONSES,
    )
    async def create_task_folder(
        folder: TaskFolderCreateRequest = Body(...),
        user_id: str = Depends(get_user_id),
    ):
        """
        Create a task folder.

        **Parameters:**
        - **title**: Folder title (required, non-empty)
        - **description**: Optional description (`background` is accepted too)
        """
        logger.info(f"API: Create folder request: user_id={user_id}")
        result = await task_folder_service.create_task_folder(user_id, folder)
        return to_response(result, success_status=status.HTTP_201_CREATED)

    @router.get(
        "/folders",
        response_model=StandardResponse,
        summary="List Task Folders",
        description="List the user's folders with total and completed task counts",
        responses=_ERROR_RESPONSES,
    )
    async def get_task_folders(user_id: str = Depends(get_user_id)):
        logger.info(f"API: List folders request: user_id={user_id}")
        result = await task_folder_service.get_task_folders(user_id)
        return to_response(result)

    @router.get(
        "/folders/{folder_id}",
        response_model=StandardResponse,
        summary="Get Task Folder",
        responses=_ERROR_RESPONSES,
    )
    async def get_task_folder(folder_id: str, user_id: str = Depends(get_user_id)):
        logger.info(f"API: Get folder request: user_id={user_id}, folder_id={folder_id}")
        result = await task_folder_service.get_task_folder(user_id, folder_id)
        return to_response(result)

    @router.put(
        "/folders/{folder_id}",
        response_model=StandardResponse,
        summary="Update Task Folder",
        description="Update the supplied fields of a folder; omitted fields are untouched",
        responses=_ERROR_RESPONSES,
    )
    async def update_task_folder(
        folder_id: str,
        folder: TaskFolderUpdateRequest = Body(...),
        user_id: str = Depends(get_user_id),
    ):
        logger.info(f"API: Update folder request: user_id={user_id}, folder_id={folder_id}")
        result = await task_folder_service.update_task_folder(user_id, folder_id, folder)
        return to_response(result)

    @router.delete(
        "/folders/{folder_id}",
        response_model=StandardResponse,
        summary="Delete Task Folder",
        description="Delete a folder together with every task inside it",
        responses=_ERROR_RESPONSES,
    )
    async def delete_task_folder(folder_id: str, user_id: str = Depends(get_user_id)):
        """
        Delete a folder and its whole subtree.

        **Returns:**
        - deleted_documents: number of documents removed (folder included)
        """
        logger.info(f"API: Delete folder request: user_id={user_id}, folder_id={folder_id}")
        result = await task_folder_service.delete_task_folder(user_id, folder_id)
        return to_response(result)

    return router
