"""
Repository Interfaces.
"""

from .task_folder_repository_interface import ITaskFolderRepository
from .task_repository_interface import ITaskRepository

__all__ = [
    "ITaskFolderRepository",
    "ITaskRepository",
]
