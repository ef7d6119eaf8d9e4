"""Business update repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from locpages.persistence.models.business_update import BusinessUpdate
from locpages.persistence.repositories.base import BaseRepository


class BusinessUpdateRepository(BaseRepository[BusinessUpdate]):
    """Repository for BusinessUpdate entities."""

    def __init__(self, session: AsyncSession):
        """Initialize business update repository."""
        super().__init__(BusinessUpdate, session)

    async def list_by_business(self, business_id: int, limit: int = 50) -> list[BusinessUpdate]:
        """List updates for a business, newest first."""
        stmt = (
            select(BusinessUpdate)
            .where(BusinessUpdate.business_id == business_id)
            .order_by(BusinessUpdate.created_at.desc(), BusinessUpdate.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def set_status(
        self,
        update_id: int,
        status: str,
        error_message: str | None = None,
        processing_time_ms: int | None = None,
    ) -> BusinessUpdate | None:
        """Transition an update's status."""
        data: dict = {"status": status, "error_message": error_message}
        if processing_time_ms is not None:
            data["processing_time_ms"] = processing_time_ms
        return await self.update(update_id, **data)
