"""API routes."""

from fastapi import APIRouter

from locpages.api.routes import businesses, pages, updates

api_router = APIRouter()

api_router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
api_router.include_router(updates.router, tags=["updates"])
api_router.include_router(pages.router, prefix="/pages", tags=["pages"])
