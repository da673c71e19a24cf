"""
Internal package.
Contains API routes, schemas, dependencies and other internal modules.
"""

from . import api

__all__ = [
    "api",
]
