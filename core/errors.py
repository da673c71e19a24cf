"""
Error taxonomy for the task manager.
Repositories raise these; services turn them into result envelopes.
"""

from typing import Dict, Optional


class TaskManagerError(Exception):
    """Base error. Keeps the lower-level cause for logging."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(TaskManagerError):
    """Bad input shape, enum value or date ordering. Never reaches storage."""


class NotFoundError(TaskManagerError):
    """Referenced folder or task does not exist."""


class PersistenceError(TaskManagerError):
    """A store operation failed or post-write verification failed."""

    def __init__(
        self,
        operation: str,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ):
        super().__init__(message or f"Persistence failure during {operation}", cause)
        self.operation = operation


class PartialFailureError(PersistenceError):
    """
    One or more branches of a concurrent fan-out failed.

    failures maps the branch key (folder id) to the exception it raised.
    The first failure is exposed as the cause.
    """

    def __init__(self, operation: str, failures: Dict[str, BaseException]):
        first = next(iter(failures.values()), None)
        super().__init__(
            operation,
            cause=first,
            message=(
                f"{operation} failed for {len(failures)} folder(s): "
                f"{', '.join(sorted(failures))}"
            ),
        )
        self.failures = failures
