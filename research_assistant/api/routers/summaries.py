from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from research_assistant.api.deps.settings import get_app_settings
from research_assistant.application.summaries import summarize_page
from research_assistant.core.config import Settings
from research_assistant.schemas.errors import ErrorResponse
from research_assistant.schemas.summaries import SummarizeRequest, SummaryResult

router = APIRouter(tags=["summaries"])


@router.post(
    "/summarize",
    response_model=SummaryResult,
    responses={
        400: {"model": ErrorResponse, "description": "Text missing or shorter than 100 characters."},
        413: {"model": ErrorResponse, "description": "Request body too large."},
        500: {"model": ErrorResponse, "description": "LLM call failed or returned an unusable reply."},
    },
)
async def summarize(
    request: SummarizeRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Any:
    summary = await summarize_page(request, settings)
    # Relay the model's object as-is, extra fields included.
    return JSONResponse(content=summary)
