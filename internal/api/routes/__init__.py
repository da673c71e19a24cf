"""
API Routes.
"""

from .health_routes import create_health_routes
from .task_folder_routes import create_task_folder_routes
from .task_routes import create_task_routes

__all__ = [
    "create_health_routes",
    "create_task_folder_routes",
    "create_task_routes",
]
