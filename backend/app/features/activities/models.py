"""
Activity models.

Models:
- Activity: One imported Strava run, tagged with the in-region flag
"""

from sqlalchemy import (
    BigInteger, Boolean, Column, DateTime, Float, ForeignKey, Integer, String,
)
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.shared.dates import utcnow


class Activity(Base):
    """
    Imported Strava activity.

    Only running kinds are stored. `in_dc_region` is computed from the
    start coordinates when the row is first written and is never
    recomputed afterwards; a re-import of the same Strava ID is a no-op.
    """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Strava identifiers
    strava_activity_id = Column(BigInteger, unique=True, nullable=False)

    # Activity info
    activity_type = Column(String(50), nullable=False)  # Run, TrailRun, VirtualRun
    activity_date = Column(DateTime, nullable=False, index=True)

    # Distance
    distance_meters = Column(Float, nullable=False, default=0.0)
    distance_miles = Column(Float, nullable=False, default=0.0)

    # Time
    moving_time_seconds = Column(Integer, nullable=True)
    elapsed_time_seconds = Column(Integer, nullable=True)

    # Performance metrics
    total_elevation_gain = Column(Float, nullable=True)
    average_speed = Column(Float, nullable=True)  # meters per second
    max_speed = Column(Float, nullable=True)
    average_heartrate = Column(Float, nullable=True)
    max_heartrate = Column(Float, nullable=True)

    # Location
    start_latitude = Column(Float, nullable=True)
    start_longitude = Column(Float, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    in_dc_region = Column(Boolean, nullable=False, default=False, index=True)

    is_manual = Column(Boolean, nullable=False, default=False)

    # Sync metadata
    synced_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="activities")

    def __repr__(self):
        return f"<Activity {self.strava_activity_id} {self.activity_type} {self.distance_miles}mi>"

    @property
    def pace_min_per_mile(self) -> float | None:
        """Average pace in minutes per mile, if computable."""
        if not self.moving_time_seconds or not self.distance_miles:
            return None
        return (self.moving_time_seconds / 60) / self.distance_miles
