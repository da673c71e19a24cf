"""
Service layer implementing business logic.
Follows Service Layer Pattern and Single Responsibility Principle.
"""

from .results import ServiceResult
from .task_aggregation import TaskAggregationEngine
from .task_folder_service import TaskFolderService
from .task_service import TaskService

__all__ = [
    "ServiceResult",
    "TaskAggregationEngine",
    "TaskFolderService",
    "TaskService",
]
