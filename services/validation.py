"""
Input validation for the service layer.
Every check here runs before any store access and raises ValidationError.
"""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError
from repositories.models import (
    TaskCreate,
    TaskFolderCreate,
    TaskFolderUpdate,
    TaskUpdate,
    parse_priority,
    parse_status,
)
from services.dates import DateLike, to_local_day, to_local_naive

M = TypeVar("M", bound=BaseModel)

STATUS_CHOICES = "Pending, In Progress, Completed"
PRIORITY_CHOICES = "High, Medium, Low"


def parse_payload(model_cls: Type[M], payload: Union[M, Mapping[str, Any], None]) -> M:
    """Accept a model instance or a plain mapping and return the model."""
    if isinstance(payload, model_cls):
        return payload
    if payload is None:
        raise ValidationError("Request body must not be empty")
    if not isinstance(payload, Mapping):
        raise ValidationError(f"Expected an object, got {type(payload).__name__}")
    try:
        return model_cls.model_validate(dict(payload))
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid fields: {details}", cause=e) from e


def require_id(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} must not be empty")
    if "/" in str(value):
        raise ValidationError(f"{name} must not contain '/'")
    return str(value).strip()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _check_text_fields(model: BaseModel, fields: tuple, partial: bool) -> None:
    """
    Required text fields must be non-empty.
    On partial updates an omitted field is fine, an explicit null or blank is not.
    """
    for field in fields:
        if partial and field not in model.model_fields_set:
            continue
        if _is_blank(getattr(model, field)):
            raise ValidationError(f"{field.capitalize()} must not be empty")


def _check_date_order(start, end) -> None:
    if start is None or end is None:
        return
    if to_local_naive(end) < to_local_naive(start):
        raise ValidationError("End date must not be earlier than start date")


def _normalized_enums(model: BaseModel, partial: bool) -> dict:
    """Map status/priority to their stored values, rejecting unknown ones."""
    changes = {}

    if not partial or "status" in model.model_fields_set:
        status = parse_status(model.status)
        if status is None:
            raise ValidationError(
                f"Invalid status {model.status!r}. Allowed: {STATUS_CHOICES}"
            )
        changes["status"] = status.value

    if not partial or "priority" in model.model_fields_set:
        priority = parse_priority(model.priority)
        if priority is None:
            raise ValidationError(
                f"Invalid priority {model.priority!r}. Allowed: {PRIORITY_CHOICES}"
            )
        changes["priority"] = priority.value

    return changes


def validate_task_create(payload: Union[TaskCreate, Mapping[str, Any], None]) -> TaskCreate:
    task = parse_payload(TaskCreate, payload)
    _check_text_fields(task, ("title", "description"), partial=False)
    _check_date_order(task.start_date, task.end_date)
    changes = _normalized_enums(task, partial=False)
    return TaskCreate(**{**task.model_dump(), **changes})


def validate_task_update(payload: Union[TaskUpdate, Mapping[str, Any], None]) -> TaskUpdate:
    task = parse_payload(TaskUpdate, payload)
    if not task.model_fields_set:
        raise ValidationError("No fields to update")
    _check_text_fields(task, ("title", "description"), partial=True)
    _check_date_order(task.start_date, task.end_date)
    changes = _normalized_enums(task, partial=True)
    # Rebuilding from the set fields keeps omitted fields out of the update
    return TaskUpdate(**{**task.to_update_dict(), **changes})


def validate_folder_create(
    payload: Union[TaskFolderCreate, Mapping[str, Any], None]
) -> TaskFolderCreate:
    folder = parse_payload(TaskFolderCreate, payload)
    _check_text_fields(folder, ("title",), partial=False)
    return folder


def validate_folder_update(
    payload: Union[TaskFolderUpdate, Mapping[str, Any], None]
) -> TaskFolderUpdate:
    folder = parse_payload(TaskFolderUpdate, payload)
    if not folder.model_fields_set:
        raise ValidationError("No fields to update")
    _check_text_fields(folder, ("title",), partial=True)
    if "is_deleted" in folder.model_fields_set and folder.is_deleted is None:
        raise ValidationError("is_deleted must be true or false")
    return folder


def validate_day(value: Optional[DateLike]):
    if value is None:
        raise ValidationError("Date must not be empty")
    try:
        return to_local_day(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date: {value!r}", cause=e) from e


def validate_threshold_days(value: Any) -> int:
    try:
        days = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid threshold_days: {value!r}", cause=e) from e
    if days < 0:
        raise ValidationError("threshold_days must not be negative")
    return days
