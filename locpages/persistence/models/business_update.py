"""Business update model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from locpages.persistence.database import Base
from locpages.utils.time_utils import utc_now

UPDATE_STATUSES = ("pending", "processing", "completed", "failed")


class BusinessUpdate(Base):
    """A user-submitted, time-bounded change (promotion, event, hours change)."""

    __tablename__ = "business_updates"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    content_text = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)

    starts_at = Column(DateTime, default=utc_now, nullable=False)
    expires_at = Column(DateTime, nullable=True)  # None = permanent

    deal_terms = Column(Text, nullable=True)
    update_category = Column(String(50), nullable=True, default="general")
    special_hours = Column(Text, nullable=True)

    error_message = Column(Text, nullable=True)
    processing_time_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    business = relationship("Business", back_populates="updates")
    pages = relationship("GeneratedPage", back_populates="business_update")

    def __repr__(self) -> str:
        return f"<BusinessUpdate(id={self.id}, business_id={self.business_id}, status={self.status})>"
