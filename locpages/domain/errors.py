"""Domain errors raised by page generation and page lifecycle services."""

from typing import Any


class PageGenerationError(Exception):
    """Base class for all page generation and lifecycle errors."""


class BusinessValidationError(PageGenerationError):
    """Required business fields are missing or invalid."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.field_errors.items())
        super().__init__(f"Invalid business profile: {details}")


class UpdateValidationError(PageGenerationError):
    """An update submission is malformed."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.field_errors.items())
        super().__init__(f"Invalid update: {details}")


class DuplicateBusinessError(PageGenerationError):
    """A business profile already exists for this contact email."""


class BusinessNotFoundError(PageGenerationError):
    """Business profile does not exist."""


class UpdateNotFoundError(PageGenerationError):
    """Business update does not exist."""


class PageNotFoundError(PageGenerationError):
    """Page does not exist (never created or already deleted)."""


class BatchNotFoundError(PageGenerationError):
    """Draft batch does not exist (never drafted, published or discarded)."""


class DraftNotFoundError(PageGenerationError):
    """Draft is not part of the batch."""


class InvalidExpirationError(PageGenerationError):
    """Requested expiration time is not in the future."""


class BatchAlreadyPublishedError(PageGenerationError):
    """Batch (or its update) is already published or being published."""


class DraftConflictError(PageGenerationError):
    """An edit would make two drafts in a batch share a route."""


class ContentWriterError(PageGenerationError):
    """The external content writer failed. The underlying error is chained as __cause__."""


class BatchPublishError(PageGenerationError):
    """Publishing stopped partway. Pages created before the failure are attached."""

    def __init__(self, message: str, created_pages: list[Any] | None = None):
        super().__init__(message)
        self.created_pages = list(created_pages or [])
