"""
Shopify Discount Manager - Main Application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .dependencies import init_dependencies
from .routes import products_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("Starting Shopify Discount Manager...")
    init_dependencies()
    logger.info("Application ready")
    yield
    logger.info("Shutting down...")


# Create app
app = FastAPI(
    title="Shopify Discount Manager",
    description="List Shopify products and apply bulk discounts",
    version="1.0.0",
    lifespan=lifespan
)

# Include routers (served both at the root and under /api)
app.include_router(products_router)
app.include_router(products_router, prefix="/api")


@app.get("/health")
async def health():
    """Health check endpoint (no auth required)."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
