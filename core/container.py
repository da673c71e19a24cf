"""
Dependency Injection Container.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from core.config import Settings, get_settings
from core.document_store import IDocumentStore
from core.logger import logger

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.
    """

    _instances: Dict[Type, Any] = {}

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """Register a singleton instance for an interface."""
        cls._instances[interface] = instance

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """Resolve an interface to its implementation."""
        if interface in cls._instances:
            return cls._instances[interface]
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def clear(cls):
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()


def bootstrap_container(store: IDocumentStore, settings: Optional[Settings] = None) -> None:
    """
    Initialize the dependency injection container.
    Wires the document store into repositories, the aggregation engine and services.

    Args:
        store: Document store shared by every repository
        settings: Settings to read tunables from (defaults to get_settings())
    """
    from repositories import TaskFolderRepository, TaskRepository
    from repositories.interfaces import ITaskFolderRepository, ITaskRepository
    from services import TaskAggregationEngine, TaskFolderService, TaskService
    from services.interfaces import ITaskFolderService, ITaskService

    settings = settings or get_settings()

    folder_repository = TaskFolderRepository(store, max_retries=settings.store_max_retries)
    task_repository = TaskRepository(store, default_order_field=settings.task_order_field)
    aggregation_engine = TaskAggregationEngine(
        task_repository, default_threshold_days=settings.nearing_due_threshold_days
    )

    Container.register(IDocumentStore, store)
    Container.register(ITaskFolderRepository, folder_repository)
    Container.register(ITaskRepository, task_repository)
    Container.register(TaskAggregationEngine, aggregation_engine)
    Container.register(ITaskFolderService, TaskFolderService(folder_repository))
    Container.register(ITaskService, TaskService(task_repository, aggregation_engine))

    logger.info(f"✅ Container bootstrapped with {type(store).__name__}")
