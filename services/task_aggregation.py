"""
Aggregation engine: read-side views built on top of the task repository.
Date filters, per-folder date filters and near-deadline alerts.
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from core import logger
from core.config import get_settings
from repositories.interfaces import ITaskRepository
from repositories.models import TaskBuckets, TaskModel, TaskStatus
from services.dates import DateLike, to_local_day, to_local_naive

SECONDS_PER_DAY = 86400

_OPEN_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


def filter_tasks_by_day(tasks: Iterable[TaskModel], day: DateLike) -> List[TaskModel]:
    """Tasks whose start_date falls on `day` (local calendar day, time ignored)."""
    target = to_local_day(day)
    return [
        task
        for task in tasks
        if task.start_date is not None and to_local_day(task.start_date) == target
    ]


def filter_buckets_by_day(buckets: TaskBuckets, day: DateLike) -> TaskBuckets:
    """Filter each status bucket independently, keeping the three-bucket shape."""
    return TaskBuckets(
        pending=filter_tasks_by_day(buckets.pending, day),
        in_progress=filter_tasks_by_day(buckets.in_progress, day),
        completed=filter_tasks_by_day(buckets.completed, day),
    )


def days_until(end: datetime, now: datetime) -> float:
    return (to_local_naive(end) - to_local_naive(now)).total_seconds() / SECONDS_PER_DAY


def is_nearing_due(task: TaskModel, now: datetime, threshold_days: int) -> bool:
    """
    An open task (pending or in progress) whose end_date is between now and
    `threshold_days` days ahead, both ends inclusive. No end_date, no alert.
    """
    if task.end_date is None or task.bucket not in _OPEN_STATUSES:
        return False
    return 0 <= days_until(task.end_date, now) <= threshold_days


class TaskAggregationEngine:
    """Cross-folder and date-based task views."""

    def __init__(
        self,
        task_repository: ITaskRepository,
        clock: Optional[Callable[[], datetime]] = None,
        default_threshold_days: Optional[int] = None,
    ):
        self.task_repository = task_repository
        self.clock = clock or datetime.now
        if default_threshold_days is None:
            default_threshold_days = get_settings().nearing_due_threshold_days
        self.default_threshold_days = default_threshold_days

    async def tasks_by_date(self, user_id: str, day: DateLike) -> List[TaskModel]:
        """All of the user's tasks starting on `day`."""
        tasks = await self.task_repository.list_all_tasks_for_user(user_id)
        matched = filter_tasks_by_day(tasks, day)
        logger.info(f"✅ {len(matched)}/{len(tasks)} tasks start on {to_local_day(day)}")
        return matched

    async def tasks_by_date_in_folder(
        self, user_id: str, folder_id: str, day: DateLike
    ) -> TaskBuckets:
        """One folder's tasks starting on `day`, still bucketed by status."""
        buckets = await self.task_repository.list_tasks_in_folder(user_id, folder_id)
        return filter_buckets_by_day(buckets, day)

    async def nearing_due_tasks(
        self,
        user_id: str,
        threshold_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[TaskModel]:
        """
        Open tasks due within `threshold_days` across every folder.

        Folders are scanned concurrently. Each result keeps its folder_source
        so the flat list stays self-describing. Sorted by end_date.
        """
        if threshold_days is None:
            threshold_days = self.default_threshold_days
        now = now or self.clock()

        grouped = await self.task_repository.list_tasks_grouped_by_folder(user_id)
        nearing = [
            task
            for _, tasks in grouped
            for task in tasks
            if is_nearing_due(task, now, threshold_days)
        ]
        nearing.sort(key=lambda task: to_local_naive(task.end_date))

        logger.info(
            f"✅ {len(nearing)} tasks due within {threshold_days} days for user_id={user_id}"
        )
        return nearing
