"""
Authentication dependencies for API endpoints.
"""

from fastapi import Header, HTTPException, status
from core.logger import logger


async def get_user_id(
    x_user_id: str = Header(None, description="UID of the authenticated user")
) -> str:
    """
    Read the caller's user id from the request header.

    Args:
        x_user_id: User id from X-User-Id header

    Returns:
        The user id

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        logger.warning("Missing user id in request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user id. Provide X-User-Id header.",
        )

    return x_user_id.strip()
