"""
API Module.
Contains the task and folder routers, their schemas, request dependencies
and envelope-to-response helpers.
"""

from . import dependencies
from . import routes
from . import schemas

__all__ = [
    "dependencies",
    "routes",
    "schemas",
]
