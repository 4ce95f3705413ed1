"""
FastAPI Main Application
Stateless coaching and commission API; the hosting product owns storage
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dealcoach.api.routes import coaching, commission, health
from dealcoach.config import settings
from dealcoach.core.logging import setup_logging
from dealcoach.domain.coaching.constants import FREE_DEAL_LIMIT
from dealcoach.domain.coaching.rules import ALL_RULES

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    """
    logger.info("=" * 60)
    logger.info("🚗 Starting Deal Coach API")
    logger.info("=" * 60)
    logger.info(f"   📋 Coaching rules: {', '.join(r.name for r in ALL_RULES)}")
    logger.info(f"   🆓 Free deal limit: {FREE_DEAL_LIMIT}")
    logger.info(f"   🕒 Calendar timezone: {settings.TIMEZONE}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    logger.info("👋 Deal Coach API shutdown complete")


app = FastAPI(
    title="Deal Coach - Commission Tracking & Coaching",
    description="Pacing stats, coaching messages and free-tier nudges for car-sales pros",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(coaching.router, prefix="/api/v1/coaching", tags=["Coaching"])
app.include_router(commission.router, prefix="/api/v1/commission", tags=["Commission"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dealcoach.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
