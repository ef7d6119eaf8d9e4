"""Domain services."""

from locpages.domain.services.batch_publication_service import BatchPublicationService, BatchRegistry
from locpages.domain.services.business_page_service import BusinessPageService
from locpages.domain.services.page_lifecycle_service import PageLifecycleService

__all__ = ["BatchPublicationService", "BatchRegistry", "BusinessPageService", "PageLifecycleService"]
