"""
Drops and mileage-gated access.

Usage:
    from app.features.drops import DropQualificationService

    granted = await DropQualificationService(db).grant_access(drop_id)
"""

from .models import Drop, DropAccess
from .repository import DropAccessRepository, DropRepository
from .schemas import (
    AccessCheckResponse,
    DropAccessResponse,
    DropCreate,
    DropResponse,
    DropUpdate,
    DropWithAccess,
    GrantResponse,
)
from .service import DropNotFoundError, DropQualificationService

__all__ = [
    # Models
    "Drop",
    "DropAccess",
    # Repositories
    "DropRepository",
    "DropAccessRepository",
    # Service
    "DropQualificationService",
    "DropNotFoundError",
    # Schemas
    "DropCreate",
    "DropUpdate",
    "DropResponse",
    "DropAccessResponse",
    "DropWithAccess",
    "GrantResponse",
    "AccessCheckResponse",
]
