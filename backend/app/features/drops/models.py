"""
Drop models.

Models:
- Drop: Time-boxed product release with per-tier mileage thresholds
- DropAccess: Frozen grant of one user's access to one drop
"""

import uuid

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer,
    String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.shared.dates import utcnow


class Drop(Base):
    """
    Product release.

    Thresholds are current-month miles; basic <= premium <= exclusive.
    """

    __tablename__ = "drops"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    release_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)  # None = ongoing

    # Tier thresholds (miles)
    required_miles_basic = Column(Float, nullable=False, default=50.0)
    required_miles_premium = Column(Float, nullable=False, default=100.0)
    required_miles_exclusive = Column(Float, nullable=False, default=150.0)

    is_active = Column(Boolean, nullable=False, default=True)
    is_published = Column(Boolean, nullable=False, default=False, index=True)
    image_url = Column(Text, nullable=True)
    total_pieces = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    access_grants = relationship(
        "DropAccess",
        back_populates="drop",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Drop {self.slug}>"


class DropAccess(Base):
    """
    Access grant.

    Mileage and tier are frozen at qualification; later qualification
    runs never rewrite an existing grant.
    """

    __tablename__ = "drop_access"
    __table_args__ = (
        UniqueConstraint("drop_id", "user_id", name="uq_drop_access_drop_user"),
        CheckConstraint(
            "access_tier IN ('basic', 'premium', 'exclusive')",
            name="ck_drop_access_tier",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    drop_id = Column(
        String(36),
        ForeignKey("drops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    access_tier = Column(String(20), nullable=False)
    mileage_at_qualification = Column(Float, nullable=False)

    qualified_at = Column(DateTime, default=utcnow)
    notified_at = Column(DateTime, nullable=True)
    first_viewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    drop = relationship("Drop", back_populates="access_grants")
    user = relationship("User", back_populates="drop_access")

    def __repr__(self):
        return f"<DropAccess drop={self.drop_id} user={self.user_id} {self.access_tier}>"
