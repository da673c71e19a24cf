"""
API Dependencies.
"""

from .auth import get_user_id

__all__ = [
    "get_user_id",
]
