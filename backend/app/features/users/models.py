"""
User-related models.

Models:
- User: Application user with cached Strava credentials and profile
"""

from sqlalchemy import BigInteger, Column, String, DateTime, Text
from sqlalchemy.orm import relationship
import uuid

from app.models.base import Base
from app.shared.dates import utcnow


class User(Base):
    """
    Application user.

    `id` is the opaque identifier issued by the identity provider.
    Strava tokens are either both set or both empty; they are only
    populated by the OAuth grant and replaced on refresh.
    """

    __tablename__ = "users"

    id = Column(String(255), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=True)

    # Strava integration (tokens should be encrypted in production)
    strava_athlete_id = Column(BigInteger, unique=True, nullable=True)
    strava_access_token = Column(Text, nullable=True)
    strava_refresh_token = Column(Text, nullable=True)
    token_expires_at = Column(DateTime, nullable=True)
    connected_at = Column(DateTime, nullable=True)
    last_synced_at = Column(DateTime, nullable=True, index=True)

    # Profile (cached from Strava athlete)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=True)
    profile_picture_url = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    activities = relationship(
        "Activity",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    mileage_summary = relationship(
        "MileageSummary",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    drop_access = relationship(
        "DropAccess",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def strava_connected(self) -> bool:
        """True once an OAuth grant has stored both tokens."""
        return bool(self.strava_access_token and self.strava_refresh_token)

    def __repr__(self):
        return f"<User {self.id} athlete={self.strava_athlete_id}>"
