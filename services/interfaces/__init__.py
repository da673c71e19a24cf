"""
Service Interfaces.
"""

from .task_folder_service_interface import ITaskFolderService
from .task_service_interface import ITaskService

__all__ = [
    "ITaskFolderService",
    "ITaskService",
]
