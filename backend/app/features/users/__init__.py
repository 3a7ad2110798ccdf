"""
User management module.

Usage:
    from app.features.users import User, UserRepository

Models:
- User: Application user with Strava credentials and cached profile

Repositories:
- UserRepository: Data access for users
"""

from .models import User
from .schemas import AthleteProfile, UserResponse
from .repository import UserRepository, UserNotFoundError

__all__ = [
    # Models
    "User",
    # Schemas
    "AthleteProfile",
    "UserResponse",
    # Repositories
    "UserRepository",
    "UserNotFoundError",
]
