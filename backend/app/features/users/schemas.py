"""
User schemas.

Pydantic models for user operations.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class AthleteProfile(BaseModel):
    """Profile fields cached from the Strava athlete payload."""

    first_name: str = ""
    last_name: Optional[str] = None
    profile_picture_url: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    @classmethod
    def from_strava(cls, athlete: dict) -> "AthleteProfile":
        """Build from the `athlete` object of a token exchange response."""
        return cls(
            first_name=athlete.get("firstname") or "",
            last_name=athlete.get("lastname"),
            profile_picture_url=athlete.get("profile"),
            city=athlete.get("city"),
            state=athlete.get("state"),
        )


class UserResponse(BaseModel):
    """User response (never includes tokens)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str]
    first_name: str
    last_name: Optional[str]
    profile_picture_url: Optional[str]
    strava_athlete_id: Optional[int]
    strava_connected: bool
    connected_at: Optional[datetime]
    last_synced_at: Optional[datetime]
