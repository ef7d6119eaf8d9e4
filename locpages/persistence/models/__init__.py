"""Database models."""

from locpages.persistence.models.business import Business
from locpages.persistence.models.business_update import BusinessUpdate
from locpages.persistence.models.generated_page import GeneratedPage

__all__ = [
    "Business",
    "BusinessUpdate",
    "GeneratedPage",
]
