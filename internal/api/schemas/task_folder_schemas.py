"""
Pydantic schemas for Task Folder API.
"""

from repositories.models import TaskFolderCreate, TaskFolderUpdate


class TaskFolderCreateRequest(TaskFolderCreate):
    """Request model for folder creation. `background` is accepted as an alias of description."""

    class Config:
        json_schema_extra = {
            "examples": [
                {"title": "Work", "description": "Office tasks"},
                {"title": "Groceries"},
            ]
        }


class TaskFolderUpdateRequest(TaskFolderUpdate):
    """Request model for folder update. Omitted fields are left untouched."""

    class Config:
        json_schema_extra = {
            "examples": [
                {"title": "Work (Q4)"},
                {"description": "Office and side projects", "is_deleted": False},
            ]
        }
