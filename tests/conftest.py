# tests/conftest.py

from __future__ import annotations

import pytest

from repositories import TaskFolderRepository, TaskRepository
from services import TaskAggregationEngine, TaskFolderService, TaskService

from .fakes import NOW, FailingDocumentStore, InMemoryDocumentStore


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def failing_store() -> FailingDocumentStore:
    return FailingDocumentStore()


@pytest.fixture()
def folder_repository(store: InMemoryDocumentStore) -> TaskFolderRepository:
    return TaskFolderRepository(store, max_retries=3)


@pytest.fixture()
def task_repository(store: InMemoryDocumentStore) -> TaskRepository:
    return TaskRepository(store, default_order_field="end_date")


@pytest.fixture()
def aggregation_engine(task_repository: TaskRepository) -> TaskAggregationEngine:
    """Engine with a frozen clock at NOW and a 3-day window."""
    return TaskAggregationEngine(task_repository, clock=lambda: NOW, default_threshold_days=3)


@pytest.fixture()
def folder_service(folder_repository: TaskFolderRepository) -> TaskFolderService:
    return TaskFolderService(folder_repository)


@pytest.fixture()
def task_service(
    task_repository: TaskRepository, aggregation_engine: TaskAggregationEngine
) -> TaskService:
    return TaskService(task_repository, aggregation_engine)
