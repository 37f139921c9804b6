"""Health check route."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from credo.config import Settings
from credo.domain.service import AuthService


router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness plus the OAuth providers this deployment accepts."""

    status: str
    timestamp: datetime
    environment: str
    oauth_providers: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    auth_service: FromDishka[AuthService],
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        oauth_providers=[p.value for p in auth_service.enabled_providers],
    )
