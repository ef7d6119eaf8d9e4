"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from locpages.api.routes import api_router, public
from locpages.logging_config import setup_logging
from locpages.settings import settings
from locpages.workers import expiration_worker

# Setup logging
setup_logging()

# Create FastAPI app
app = FastAPI(
    title="LocPages API",
    description="Short-lived, AI-discoverable local business pages",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_v1_prefix)

# Include worker routes (for Cloud Tasks)
app.include_router(expiration_worker.router, prefix="/workers", tags=["workers"])


@app.get("/health")
async def health_check():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "LocPages API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Public page routes (catch-all paths, keep last)
app.include_router(public.router, tags=["public"])
