from fastapi import APIRouter

from dealcoach.config import settings

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "environment": settings.APP_ENV, "timezone": settings.TIMEZONE}
