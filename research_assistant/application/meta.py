from __future__ import annotations

import logging
from datetime import datetime, timezone

from research_assistant.schemas.meta import HealthResponse

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    # Millisecond precision with a Z suffix, e.g. 2024-05-01T12:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def health_status() -> HealthResponse:
    logger.debug("health check ok")
    return HealthResponse(status="OK", timestamp=_utc_timestamp())
