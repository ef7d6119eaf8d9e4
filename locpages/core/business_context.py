"""Business context for tagging logs with the business being worked on."""

from contextvars import ContextVar
from typing import Optional

# Context variable for business_id
business_id_var: ContextVar[Optional[int]] = ContextVar("business_id", default=None)


def set_business_context(business_id: int | None) -> None:
    """Set the current business context.

    Args:
        business_id: Business ID to set in context
    """
    business_id_var.set(business_id)


def get_business_context() -> int | None:
    """Get the current business context.

    Returns:
        Current business ID or None
    """
    return business_id_var.get()


def clear_business_context() -> None:
    """Clear the current business context."""
    business_id_var.set(None)
