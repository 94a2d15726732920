from datetime import datetime, timezone

from fastapi import APIRouter

from taskboard.schemas.common import Envelope, HealthData

router = APIRouter(tags=["health"])


@router.get("/health", response_model=Envelope[HealthData])
def health():
    return Envelope(data=HealthData(status="OK", timestamp=datetime.now(timezone.utc)))
