"""Repository implementations."""

from locpages.persistence.repositories.base import BaseRepository
from locpages.persistence.repositories.business_repository import BusinessRepository
from locpages.persistence.repositories.business_update_repository import BusinessUpdateRepository
from locpages.persistence.repositories.generated_page_repository import GeneratedPageRepository

__all__ = [
    "BaseRepository",
    "BusinessRepository",
    "BusinessUpdateRepository",
    "GeneratedPageRepository",
]
