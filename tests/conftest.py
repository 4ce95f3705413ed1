from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from dealcoach.api.routes import coaching, commission, health


@pytest.fixture()
def app() -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(coaching.router, prefix="/api/v1/coaching", tags=["Coaching"])
    app.include_router(commission.router, prefix="/api/v1/commission", tags=["Commission"])
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
