"""
Uniform result envelope returned by every service call.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.errors import NotFoundError, TaskManagerError, ValidationError
from core.logger import format_exception_short, logger


class ServiceResult(BaseModel):
    """
    {success, message, data} envelope.

    The original exception is kept on `error` for logging and inspection;
    it is never serialized.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[BaseException] = Field(default=None, exclude=True)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable envelope."""
        return self.model_dump(mode="json")


def success_result(message: str = "Success", data: Any = None) -> ServiceResult:
    return ServiceResult(success=True, message=message, data=data)


def failure_result(context: str, error: BaseException) -> ServiceResult:
    """
    Build a failure envelope for an error raised during `context`.

    Domain errors contribute their own message. Anything else is reported
    generically so no raw lower-level text reaches the caller.
    """
    if isinstance(error, TaskManagerError):
        message = f"{context}: {error.message}"
    else:
        message = f"{context}: an unexpected error occurred"

    if isinstance(error, (ValidationError, NotFoundError)):
        logger.warning(f"⚠️ {message}")
    else:
        logger.error(f"❌ {context}: {format_exception_short(error)}")
        logger.opt(exception=error).debug(f"{context} error details:")

    return ServiceResult(success=False, message=message, error=error)
