"""
Drop schemas.

Pydantic models for drop management and access.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DropBase(BaseModel):
    """Fields shared by drop create and response."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    release_date: datetime
    end_date: Optional[datetime] = None
    required_miles_basic: float = Field(default=50.0, ge=0)
    required_miles_premium: float = Field(default=100.0, ge=0)
    required_miles_exclusive: float = Field(default=150.0, ge=0)
    is_active: bool = True
    is_published: bool = False
    image_url: Optional[str] = None
    total_pieces: int = Field(default=0, ge=0)


class DropCreate(DropBase):
    """Operator request to create a drop."""

    @model_validator(mode="after")
    def check_threshold_order(self):
        if not (
            self.required_miles_basic
            <= self.required_miles_premium
            <= self.required_miles_exclusive
        ):
            raise ValueError("Thresholds must satisfy basic <= premium <= exclusive")
        return self


class DropUpdate(BaseModel):
    """Operator request to change a drop (only provided fields are written)."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    release_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    required_miles_basic: Optional[float] = Field(None, ge=0)
    required_miles_premium: Optional[float] = Field(None, ge=0)
    required_miles_exclusive: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None
    is_published: Optional[bool] = None
    image_url: Optional[str] = None
    total_pieces: Optional[int] = Field(None, ge=0)


class DropResponse(DropBase):
    model_config = ConfigDict(from_attributes=True)

    id: str


class DropAccessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    drop_id: str
    access_tier: str
    mileage_at_qualification: float
    qualified_at: Optional[datetime]
    first_viewed_at: Optional[datetime]


class DropWithAccess(DropResponse):
    """Published drop plus the caller's grant, if any."""

    access: Optional[DropAccessResponse] = None


class GrantResponse(BaseModel):
    drop_id: str
    granted_count: int


class AccessCheckResponse(BaseModel):
    has_access: bool
