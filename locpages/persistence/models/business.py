"""Business profile model."""

from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from locpages.persistence.database import Base
from locpages.utils.time_utils import utc_now


class Business(Base):
    """A business's durable profile. One profile per contact email."""

    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), nullable=False, index=True)
    primary_category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)

    # Address & contact
    address_street = Column(String(255), nullable=True)
    address_city = Column(String(100), nullable=False)
    address_state = Column(String(50), nullable=False)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(10), nullable=False, default="US")
    phone = Column(String(50), nullable=True)
    website = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Hours: free text, per-day free text ("monday": "9:00-17:00"), or pre-structured
    hours = Column(Text, nullable=True)
    base_hours = Column(JSON, nullable=True)
    structured_hours = Column(JSON, nullable=True)

    price_positioning = Column(String(20), nullable=True)  # budget, mid-range, premium, luxury
    established_year = Column(Integer, nullable=True)

    specialties = Column(JSON, nullable=True)
    services = Column(JSON, nullable=True)
    payment_methods = Column(JSON, nullable=True)
    accessibility_features = Column(JSON, nullable=True)
    languages_spoken = Column(JSON, nullable=True)
    parking_info = Column(JSON, nullable=True)
    service_area = Column(Text, nullable=True)
    service_area_details = Column(JSON, nullable=True)

    # Authority & social proof
    awards = Column(JSON, nullable=True)
    certifications = Column(JSON, nullable=True)
    social_media = Column(JSON, nullable=True)
    review_summary = Column(JSON, nullable=True)
    business_faqs = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    updates = relationship("BusinessUpdate", back_populates="business", cascade="all, delete-orphan")
    pages = relationship("GeneratedPage", back_populates="business", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, name={self.name}, slug={self.slug})>"
