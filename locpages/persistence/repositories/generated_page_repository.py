"""Generated page repository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from locpages.persistence.models.generated_page import PAGE_TYPE_BUSINESS, GeneratedPage
from locpages.persistence.repositories.base import BaseRepository


class GeneratedPageRepository(BaseRepository[GeneratedPage]):
    """Repository for GeneratedPage entities."""

    def __init__(self, session: AsyncSession):
        """Initialize generated page repository."""
        super().__init__(GeneratedPage, session)

    async def list_by_business(self, business_id: int, skip: int = 0, limit: int = 100) -> list[GeneratedPage]:
        """List pages for a business, newest first."""
        stmt = (
            select(GeneratedPage)
            .where(GeneratedPage.business_id == business_id)
            .order_by(GeneratedPage.created_at.desc(), GeneratedPage.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_batch(self, batch_id: str) -> list[GeneratedPage]:
        """List pages published from one generation batch."""
        stmt = (
            select(GeneratedPage)
            .where(GeneratedPage.generation_batch_id == batch_id)
            .order_by(GeneratedPage.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_business_page(self, business_id: int) -> GeneratedPage | None:
        """Get the permanent profile page of a business."""
        stmt = select(GeneratedPage).where(
            GeneratedPage.business_id == business_id,
            GeneratedPage.page_type == PAGE_TYPE_BUSINESS,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_file_path(self, file_path: str) -> list[GeneratedPage]:
        """List pages published at a route path, newest first."""
        stmt = (
            select(GeneratedPage)
            .where(GeneratedPage.file_path == file_path)
            .order_by(GeneratedPage.created_at.desc(), GeneratedPage.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def file_path_taken(self, file_path: str) -> bool:
        """Check whether any page already uses a route path."""
        stmt = select(GeneratedPage.id).where(GeneratedPage.file_path == file_path).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar() is not None

    async def list_due_for_expiration(self, now: datetime) -> list[GeneratedPage]:
        """List active pages whose expiration time has passed but are not yet marked expired."""
        stmt = select(GeneratedPage).where(
            GeneratedPage.active.is_(True),
            GeneratedPage.expired_at.is_(None),
            GeneratedPage.expires_at.is_not(None),
            GeneratedPage.expires_at <= now,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_expiring_between(self, start: datetime, end: datetime) -> list[GeneratedPage]:
        """List active pages expiring inside (start, end]."""
        stmt = (
            select(GeneratedPage)
            .where(
                GeneratedPage.active.is_(True),
                GeneratedPage.expired_at.is_(None),
                GeneratedPage.expires_at > start,
                GeneratedPage.expires_at <= end,
            )
            .order_by(GeneratedPage.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
