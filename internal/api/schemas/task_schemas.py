"""
Pydantic schemas for Task API.
"""

from repositories.models import TaskCreate, TaskUpdate


class TaskCreateRequest(TaskCreate):
    """Request model for task creation."""

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "title": "Write report",
                    "description": "Quarterly sales summary",
                    "status": "Pending",
                    "priority": "High",
                    "start_date": "2025-11-03T09:00:00+07:00",
                    "end_date": "2025-11-05T17:00:00+07:00",
                }
            ]
        }


class TaskUpdateRequest(TaskUpdate):
    """Request model for task update. Omitted fields are left untouched."""

    class Config:
        json_schema_extra = {
            "examples": [
                {"status": "In Progress"},
                {"status": "Completed", "done_date": "2025-11-04T15:30:00+07:00"},
            ]
        }
