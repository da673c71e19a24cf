"""
Task API Routes.
Cross-folder views (all tasks, by date, nearing due) and per-folder task CRUD.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from core.logger import logger
from internal.api.dependencies.auth import get_user_id
from internal.api.schemas import StandardResponse, TaskCreateRequest, TaskUpdateRequest
from internal.api.utils import to_response
from services.interfaces import ITaskService

_ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": StandardResponse},
    401: {"description": "Missing X-User-Id header", "model": StandardResponse},
    404: {"description": "Task or folder not found", "model": StandardResponse},
    500: {"description": "Internal server error", "model": StandardResponse},
}


def create_task_routes(task_service: ITaskService) -> APIRouter:
    """
    Factory function to create task routes with dependency injection.

    Args:
        task_service: Implementation of ITaskService

    Returns:
        APIRouter: Configured router with all task endpoints
    """
    router = APIRouter(prefix="/api/v1/task", tags=["Tasks"])

    @router.get(
        "/tasks",
        response_model=StandardResponse,
        summary="List All Tasks",
        description="List every task of the user across all folders",
        responses=_ERROR_RESPONSES,
    )
    async def get_tasks_by_user(user_id: str = Depends(get_user_id)):
        logger.info(f"API: List tasks request: user_id={user_id}")
        result = await task_service.get_tasks_by_user(user_id)
        return to_response(result)

    @router.get(
        "/tasks/date",
        response_model=StandardResponse,
        summary="List Tasks By Date",
        description="List the user's tasks whose start date falls on the given day",
        responses=_ERROR_RESPONSES,
    )
    async def get_tasks_by_date(
        date: Optional[str] = Query(None, description="Day to match, YYYY-MM-DD"),
        user_id: str = Depends(get_user_id),
    ):
        logger.info(f"API: Tasks by date request: user_id={user_id}, date={date}")
        result = await task_service.get_tasks_by_date(user_id, date)
        return to_response(result)

    @router.get(
        "/tasks/nearing-due",
        response_model=StandardResponse,
        summary="List Nearing Due Tasks",
        description="List open tasks whose end date is within the look-ahead window",
        responses=_ERROR_RESPONSES,
    )
    async def get_nearing_due_tasks(
        threshold_days: Optional[int] = Query(
            None, description="Look-ahead window in days (default from settings)"
        ),
        user_id: str = Depends(get_user_id),
    ):
        """
        Tasks that are pending or in progress and due within `threshold_days`.

        **Returns:**
        A flat list sorted by end date; each task carries `folder_source`.
        """
        logger.info(
            f"API: Nearing due request: user_id={user_id}, threshold_days={threshold_days}"
        )
        result = await task_service.get_nearing_due_tasks(user_id, threshold_days)
        return to_response(result)

    @router.get(
        "/folders/{folder_id}/tasks",
        response_model=StandardResponse,
        summary="List Folder Tasks",
        description="List a folder's tasks grouped into pending, in_progress and completed",
        responses=_ERROR_RESPONSES,
    )
    async def get_tasks_in_folder(
        folder_id: str,
        order_by: Optional[str] = Query(None, description="Field to sort by (ascending)"),
        user_id: str = Depends(get_user_id),
    ):
        logger.info(
            f"API: Folder tasks request: user_id={user_id}, folder_id={folder_id}, order_by={order_by}"
        )
        result = await task_service.get_tasks_in_folder(user_id, folder_id, order_by)
        return to_response(result)

    @router.get(
        "/folders/{folder_id}/tasks/date",
        response_model=StandardResponse,
        summary="List Folder Tasks By Date",
        responses=_ERROR_RESPONSES,
    )
    async def get_tasks_by_date_in_folder(
        folder_id: str,
        date: Optional[str] = Query(None, description="Day to match, YYYY-MM-DD"),
        user_id: str = Depends(get_user_id),
    ):
        logger.info(
            f"API: Folder tasks by date request: user_id={user_id}, folder_id={folder_id}, date={date}"
        )
        result = await task_service.get_tasks_by_date_in_folder(user_id, folder_id, date)
        return to_response(result)

    @router.post(
        "/folders/{folder_id}/tasks",
        response_model=StandardResponse,
        status_code=status.HTTP_201_CREATED,
        summary="Create Task",
        responses=_ERROR_RESPONSES,
    )
    async def create_task(
        folder_id: str,
        task: TaskCreateRequest = Body(...),
        user_id: str = Depends(get_user_id),
    ):
        """
        Create a task in a folder.

        **Parameters:**
        - **title**, **description**: required, non-empty
        - **status**: Pending / In Progress / Completed (default Pending)
        - **priority**: High / Medium / Low (default Medium)
        - **start_date**, **end_date**: end must not precede start
        """
        logger.info(f"API: Create task request: user_id={user_id}, folder_id={folder_id}")
        result = await task_service.create_task(user_id, folder_id, task)
        return to_response(result, success_status=status.HTTP_201_CREATED)

    @router.get(
        "/folders/{folder_id}/tasks/{task_id}",
        response_model=StandardResponse,
        summary="Get Task",
        responses=_ERROR_RESPONSES,
    )
    async def get_task(folder_id: str, task_id: str, user_id: str = Depends(get_user_id)):
        logger.info(
            f"API: Get task request: user_id={user_id}, folder_id={folder_id}, task_id={task_id}"
        )
        result = await task_service.get_task(user_id, folder_id, task_id)
        return to_response(result)

    @router.put(
        "/folders/{folder_id}/tasks/{task_id}",
        response_model=StandardResponse,
        summary="Update Task",
        description="Update the supplied fields of a task; omitted fields are untouched",
        responses=_ERROR_RESPONSES,
    )
    async def update_task(
        folder_id: str,
        task_id: str,
        task: TaskUpdateRequest = Body(...),
        user_id: str = Depends(get_user_id),
    ):
        logger.info(
            f"API: Update task request: user_id={user_id}, folder_id={folder_id}, task_id={task_id}"
        )
        result = await task_service.update_task(user_id, folder_id, task_id, task)
        return to_response(result)

    @router.delete(
        "/folders/{folder_id}/tasks/{task_id}",
        response_model=StandardResponse,
        summary="Delete Task",
        responses=_ERROR_RESPONSES,
    )
    async def delete_task(folder_id: str, task_id: str, user_id: str = Depends(get_user_id)):
        logger.info(
            f"API: Delete task request: user_id={user_id}, folder_id={folder_id}, task_id={task_id}"
        )
        result = await task_service.delete_task(user_id, folder_id, task_id)
        return to_response(result)

    return router
