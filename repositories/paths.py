"""
Document tree paths.

    task_folders/{user_id}/folders/{folder_id}/tasks/{task_id}
"""

from core.document_store import join_path
from repositories.models import (
    FOLDERS_COLLECTION,
    FOLDERS_ROOT_COLLECTION,
    TASKS_COLLECTION,
)


def folders_path(user_id: str) -> str:
    return join_path(FOLDERS_ROOT_COLLECTION, user_id, FOLDERS_COLLECTION)


def folder_path(user_id: str, folder_id: str) -> str:
    return join_path(FOLDERS_ROOT_COLLECTION, user_id, FOLDERS_COLLECTION, folder_id)


def tasks_path(user_id: str, folder_id: str) -> str:
    return join_path(
        FOLDERS_ROOT_COLLECTION, user_id, FOLDERS_COLLECTION, folder_id, TASKS_COLLECTION
    )


def task_path(user_id: str, folder_id: str, task_id: str) -> str:
    return join_path(
        FOLDERS_ROOT_COLLECTION,
        user_id,
        FOLDERS_COLLECTION,
        folder_id,
        TASKS_COLLECTION,
        task_id,
    )
