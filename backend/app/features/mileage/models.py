"""
Mileage summary model.

Models:
- MileageSummary: Per-user rolling-window totals and the derived tier
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.shared.dates import utcnow


class MileageSummary(Base):
    """
    Aggregated in-region mileage for one user.

    Fully overwritten on every recalculation; `access_tier` is always
    written together with `current_month_miles`.
    """

    __tablename__ = "mileage_summaries"

    user_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Windowed in-region miles
    current_month_miles = Column(Float, nullable=False, default=0.0, index=True)
    last_month_miles = Column(Float, nullable=False, default=0.0)
    current_year_miles = Column(Float, nullable=False, default=0.0)
    total_miles = Column(Float, nullable=False, default=0.0)

    # All-time counts
    total_activities = Column(Integer, nullable=False, default=0)
    dc_activities = Column(Integer, nullable=False, default=0)
    last_activity_date = Column(DateTime, nullable=True)

    access_tier = Column(String(20), nullable=False, default="none")
    last_calculated_at = Column(DateTime, default=utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="mileage_summary")

    def __repr__(self):
        return f"<MileageSummary {self.user_id} {self.current_month_miles}mi {self.access_tier}>"
