"""
Imported activity storage.

Usage:
    from app.features.activities import Activity, ActivityRepository
"""

from .models import Activity
from .repository import ActivityRepository
from .schemas import ActivityResponse

__all__ = [
    "Activity",
    "ActivityRepository",
    "ActivityResponse",
]
