"""Generated page model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text, text
from sqlalchemy.orm import relationship

from locpages.persistence.database import Base
from locpages.utils.time_utils import utc_now

PAGE_TYPE_BUSINESS = "business"
PAGE_TYPE_UPDATE = "update"


class GeneratedPage(Base):
    """A public page produced from a business profile or one of its updates."""

    __tablename__ = "generated_pages"
    __table_args__ = (
        # At most one permanent profile page per business
        Index(
            "uq_generated_pages_business_profile",
            "business_id",
            unique=True,
            postgresql_where=text("page_type = 'business'"),
            sqlite_where=text("page_type = 'business'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    update_id = Column(Integer, ForeignKey("business_updates.id", ondelete="SET NULL"), nullable=True, index=True)

    file_path = Column(String(500), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    page_type = Column(String(20), nullable=False, default=PAGE_TYPE_UPDATE)
    intent_type = Column(String(30), nullable=True)
    page_variant = Column(String(100), nullable=True)
    generation_batch_id = Column(String(36), nullable=True, index=True)
    page_data = Column(JSON, nullable=True)
    discoverability_score = Column(Integer, nullable=True)

    active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime, nullable=True, index=True)  # None = never expires
    expired_at = Column(DateTime, nullable=True)  # Set only once the page has expired

    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    business = relationship("Business", back_populates="pages")
    business_update = relationship("BusinessUpdate", back_populates="pages")

    def __repr__(self) -> str:
        return f"<GeneratedPage(id={self.id}, business_id={self.business_id}, file_path={self.file_path}, active={self.active})>"
