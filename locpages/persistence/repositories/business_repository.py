"""Business profile repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from locpages.persistence.models.business import Business
from locpages.persistence.repositories.base import BaseRepository


class BusinessRepository(BaseRepository[Business]):
    """Repository for Business entities."""

    def __init__(self, session: AsyncSession):
        """Initialize business repository."""
        super().__init__(Business, session)

    async def get_by_email(self, email: str) -> Business | None:
        """Get business profile by contact email (case-insensitive)."""
        stmt = select(Business).where(Business.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(
        self,
        slug: str,
        address_city: str | None = None,
        address_state: str | None = None,
    ) -> Business | None:
        """Get a business by slug, optionally limited to one city."""
        stmt = select(Business).where(Business.slug == slug)
        if address_city is not None:
            stmt = stmt.where(func.lower(Business.address_city) == address_city.strip().lower())
        if address_state is not None:
            stmt = stmt.where(func.lower(Business.address_state) == address_state.strip().lower())
        result = await self.session.execute(stmt.order_by(Business.id).limit(1))
        return result.scalar_one_or_none()
