"""
API Schemas (Request/Response Models).
"""

from .common_schemas import (
    StandardResponse,
    HealthResponse,
)
from .task_folder_schemas import (
    TaskFolderCreateRequest,
    TaskFolderUpdateRequest,
)
from .task_schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
)

__all__ = [
    # Common schemas
    "StandardResponse",
    "HealthResponse",
    # Folder schemas
    "TaskFolderCreateRequest",
    "TaskFolderUpdateRequest",
    # Task schemas
    "TaskCreateRequest",
    "TaskUpdateRequest",
]
