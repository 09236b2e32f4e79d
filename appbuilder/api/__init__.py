# appbuilder/api/__init__.py
"""
API module - All route handlers.
"""
from . import health, requirements

__all__ = [
    "health",
    "requirements",
]
