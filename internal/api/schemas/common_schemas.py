"""
Common API schemas shared across different endpoints.
"""

from pydantic import BaseModel
from typing import Any, Optional


class StandardResponse(BaseModel):
    """
    Standard API response format for all endpoints.

    - success: whether the operation succeeded
    - message: Success or error message
    - data: Response data (null on failure)
    """

    success: bool = True
    message: str
    data: Optional[Any] = None

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "success": True,
                    "message": "Task folder successfully retrieved",
                    "data": {
                        "id": "6541234abcdef0123456789a",
                        "title": "Work",
                        "description": "Office tasks",
                        "total_tasks": 4,
                        "completed_tasks_count": 1,
                    },
                },
                {
                    "success": False,
                    "message": "Error fetching task folder: Task folder not found: 6541234abcdef0123456789a",
                    "data": None,
                },
            ]
        }


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
    database: str

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "status": "healthy",
                    "service": "Deck Task Manager",
                    "version": "1.0.0",
                    "database": "connected",
                }
            ]
        }
