"""
Document models using Pydantic.
Covers task folders, tasks, the status/priority enumerations and the
explicit optional-field update models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from core.document_store import StoredDocument


class TaskStatus(str, Enum):
    """Task status enumeration (stored values)."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority enumeration (stored values)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def _canonical_key(raw: Any) -> str:
    """Trim, lower-case and treat spaces, underscores and hyphens alike."""
    text = str(raw).strip().lower().replace("-", " ").replace("_", " ")
    return "_".join(text.split())


def parse_status(raw: Any) -> Optional[TaskStatus]:
    """
    Strict status parsing for input validation.

    Returns:
        The matching TaskStatus, or None if the value is not a known spelling
    """
    if raw is None:
        return None
    try:
        return TaskStatus(_canonical_key(raw))
    except ValueError:
        return None


def normalize_status(raw: Any) -> TaskStatus:
    """
    Lenient status normalization for stored data.
    "Completed", "completed" and "COMPLETED " all map to COMPLETED;
    "In Progress", "in_progress" and "in progress" map to IN_PROGRESS.
    Anything unrecognized (including a missing status) reads as PENDING.
    """
    return parse_status(raw) or TaskStatus.PENDING


def parse_priority(raw: Any) -> Optional[TaskPriority]:
    if raw is None:
        return None
    try:
        return TaskPriority(_canonical_key(raw))
    except ValueError:
        return None


def to_local_aware(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach the local offset to a naive datetime before it is persisted.
    BSON stores datetimes as UTC, so a naive local value would otherwise
    be read back shifted by the server's offset.
    """
    if value is not None and value.tzinfo is None:
        return value.astimezone()
    return value


class TaskFolderModel(BaseModel):
    """Task folder document as read from the store."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Store-assigned folder id")
    user_id: Optional[str] = Field(None, description="Owner of the folder")
    title: Optional[str] = Field(None, description="Folder title")
    description: Optional[str] = Field(None, description="Folder description")
    timestamp: Optional[datetime] = Field(None, description="Creation time")
    is_deleted: bool = Field(default=False, description="Soft-delete flag")

    @classmethod
    def from_document(cls, document: StoredDocument) -> "TaskFolderModel":
        """Build from a stored document, taking the id from its path."""
        return cls(**{**document.data, "id": document.id})


class TaskFolderWithStats(TaskFolderModel):
    """Folder plus task counters derived at read time."""

    total_tasks: int = Field(default=0, description="Number of tasks in the folder")
    completed_tasks_count: int = Field(
        default=0, description="Number of completed tasks in the folder"
    )


class TaskFolderCreate(BaseModel):
    """Fields accepted when creating a folder."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = Field(
        None, validation_alias=AliasChoices("description", "background")
    )
    timestamp: Optional[datetime] = None
    is_deleted: bool = False

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_aware(value)

    def to_document(self, user_id: str) -> Dict[str, Any]:
        """Document body to persist for `user_id`."""
        data = self.model_dump()
        data["user_id"] = user_id
        if data["timestamp"] is None:
            data["timestamp"] = datetime.now().astimezone()
        return data


class TaskFolderUpdate(BaseModel):
    """
    Partial folder update.
    Only fields present in model_fields_set are written.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = Field(
        None, validation_alias=AliasChoices("description", "background")
    )
    is_deleted: Optional[bool] = None

    def to_update_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TaskModel(BaseModel):
    """Task document as read from the store."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Store-assigned task id")
    task_folder_id: Optional[str] = Field(None, description="Owning folder id")
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = Field(None, description="Raw stored status")
    priority: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    done_date: Optional[datetime] = None
    folder_source: Optional[str] = Field(
        None, description="Title of the owning folder, resolved at read time"
    )

    @classmethod
    def from_document(
        cls, document: StoredDocument, folder_source: Optional[str] = None
    ) -> "TaskModel":
        data = {**document.data, "id": document.id}
        if folder_source is not None:
            data["folder_source"] = folder_source
        return cls(**data)

    @property
    def bucket(self) -> TaskStatus:
        return normalize_status(self.status)


class TaskCreate(BaseModel):
    """Fields accepted when creating a task."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = TaskStatus.PENDING.value
    priority: Optional[str] = TaskPriority.MEDIUM.value
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    done_date: Optional[datetime] = None

    @field_serializer("start_date", "end_date", "done_date")
    def serialize_dates(self, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_aware(value)

    def to_document(self, folder_id: str) -> Dict[str, Any]:
        data = self.model_dump()
        data["task_folder_id"] = folder_id
        return data


class TaskUpdate(BaseModel):
    """
    Partial task update.
    An omitted field is untouched; an explicitly supplied None is kept in
    model_fields_set so validation can tell the two apart.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    done_date: Optional[datetime] = None

    @field_serializer("start_date", "end_date", "done_date")
    def serialize_dates(self, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_aware(value)

    def to_update_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TaskBuckets(BaseModel):
    """Tasks of one folder partitioned by normalized status."""

    pending: List[TaskModel] = Field(default_factory=list)
    in_progress: List[TaskModel] = Field(default_factory=list)
    completed: List[TaskModel] = Field(default_factory=list)

    def add(self, task: TaskModel) -> None:
        if task.bucket is TaskStatus.COMPLETED:
            self.completed.append(task)
        elif task.bucket is TaskStatus.IN_PROGRESS:
            self.in_progress.append(task)
        else:
            self.pending.append(task)

    def all_tasks(self) -> List[TaskModel]:
        return [*self.pending, *self.in_progress, *self.completed]

    @property
    def total(self) -> int:
        return len(self.pending) + len(self.in_progress) + len(self.completed)


# Document tree collection names
FOLDERS_ROOT_COLLECTION = "task_folders"
FOLDERS_COLLECTION = "folders"
TASKS_COLLECTION = "tasks"
