from fastapi import APIRouter

from research_assistant.application.meta import health_status
from research_assistant.schemas.meta import HealthResponse

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return await health_status()
