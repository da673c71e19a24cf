from datetime import date, datetime, timedelta

import pytest

from core.errors import NotFoundError, PartialFailureError
from repositories import TaskRepository
from repositories.models import TaskModel
from repositories.paths import tasks_path
from services import TaskAggregationEngine
from services.task_aggregation import days_until, filter_tasks_by_day, is_nearing_due

from .fakes import NOW, USER_ID, seed_folder, seed_task


def test_days_until_is_fractional():
    assert days_until(NOW + timedelta(hours=36), NOW) == pytest.approx(1.5)
    assert days_until(NOW - timedelta(hours=12), NOW) == pytest.approx(-0.5)


@pytest.mark.parametrize(
    "status, end_offset, expected",
    [
        ("pending", timedelta(days=1), True),
        ("In Progress", timedelta(days=2), True),
        ("pending", timedelta(0), True),
        ("pending", timedelta(days=3), True),
        ("pending", timedelta(days=3, minutes=1), False),
        ("pending", timedelta(hours=-1), False),
        ("Completed", timedelta(days=1), False),
        ("archived", timedelta(days=1), True),
    ],
)
def test_is_nearing_due_window(status, end_offset, expected):
    task = TaskModel(id="t", status=status, end_date=NOW + end_offset)
    assert is_nearing_due(task, NOW, threshold_days=3) is expected


def test_task_without_end_date_is_never_nearing_due():
    assert is_nearing_due(TaskModel(id="t", status="pending"), NOW, 3) is False


def test_filter_by_day_ignores_time_of_day():
    tasks = [
        TaskModel(id="midnight", start_date=datetime(2025, 11, 3, 0, 0)),
        TaskModel(id="late", start_date=datetime(2025, 11, 3, 23, 59)),
        TaskModel(id="next", start_date=datetime(2025, 11, 4, 0, 0)),
        TaskModel(id="none"),
    ]
    matched = filter_tasks_by_day(tasks, date(2025, 11, 3))
    assert [t.id for t in matched] == ["midnight", "late"]


async def test_tasks_by_date_across_folders(store, aggregation_engine):
    seed_folder(store, "f1", "Work")
    seed_folder(store, "f2", "Home")
    seed_task(store, "f1", "t1", "A", start_date=datetime(2025, 11, 3, 9))
    seed_task(store, "f2", "t2", "B", start_date=datetime(2025, 11, 3, 18))
    seed_task(store, "f2", "t3", "C", start_date=datetime(2025, 11, 4, 9))

    tasks = await aggregation_engine.tasks_by_date(USER_ID, "2025-11-03")

    assert sorted(t.id for t in tasks) == ["t1", "t2"]


async def test_tasks_by_date_in_folder_keeps_buckets(store, aggregation_engine):
    seed_folder(store, "f1", "Work")
    seed_task(store, "f1", "t1", "A", start_date=datetime(2025, 11, 3, 9))
    seed_task(store, "f1", "t2", "B", status="Completed", start_date=datetime(2025, 11, 3, 10))
    seed_task(store, "f1", "t3", "C", start_date=datetime(2025, 11, 5, 9))

    buckets = await aggregation_engine.tasks_by_date_in_folder(USER_ID, "f1", date(2025, 11, 3))

    assert [t.id for t in buckets.pending] == ["t1"]
    assert buckets.in_progress == []
    assert [t.id for t in buckets.completed] == ["t2"]


async def test_tasks_by_date_in_missing_folder(aggregation_engine):
    with pytest.raises(NotFoundError):
        await aggregation_engine.tasks_by_date_in_folder(USER_ID, "nope", date(2025, 11, 3))


async def test_nearing_due_sorted_with_folder_source(store, aggregation_engine):
    seed_folder(store, "f1", "Work")
    seed_folder(store, "f2", "Home")
    seed_task(store, "f1", "soon", "Soon", end_date=NOW + timedelta(days=2))
    seed_task(store, "f2", "sooner", "Sooner", end_date=NOW + timedelta(hours=5))
    seed_task(store, "f2", "done", "Done", status="completed", end_date=NOW + timedelta(hours=1))
    seed_task(store, "f1", "later", "Later", end_date=NOW + timedelta(days=10))
    seed_task(store, "f1", "open", "No deadline")

    tasks = await aggregation_engine.nearing_due_tasks(USER_ID)

    assert [t.id for t in tasks] == ["sooner", "soon"]
    assert [t.folder_source for t in tasks] == ["Home", "Work"]


async def test_nearing_due_custom_threshold(store, aggregation_engine):
    seed_folder(store, "f1", "Work")
    seed_task(store, "f1", "later", "Later", end_date=NOW + timedelta(days=10))

    assert await aggregation_engine.nearing_due_tasks(USER_ID, threshold_days=3) == []
    tasks = await aggregation_engine.nearing_due_tasks(USER_ID, threshold_days=10)
    assert [t.id for t in tasks] == ["later"]


async def test_nearing_due_fails_when_any_folder_fails(failing_store):
    seed_folder(failing_store, "f1", "Work")
    seed_folder(failing_store, "f2", "Home")
    seed_task(failing_store, "f1", "soon", "Soon", end_date=NOW + timedelta(days=1))
    failing_store.fail_lists.add(tasks_path(USER_ID, "f2"))
    engine = TaskAggregationEngine(
        TaskRepository(failing_store), clock=lambda: NOW, default_threshold_days=3
    )

    with pytest.raises(PartialFailureError):
        await engine.nearing_due_tasks(USER_ID)
