"""Heartbeat endpoint pinged by the UI while its window is open."""

from typing import Annotated

from fastapi import APIRouter, Depends

from infinito_catalog.api.dependencies import get_watchdog
from infinito_catalog.api.schemas import HeartbeatResponse
from infinito_catalog.desktop.watchdog import HeartbeatWatchdog

router = APIRouter(prefix="/api", tags=["Lifecycle"])


@router.post("/heartbeat", response_model=HeartbeatResponse)
async def heartbeat(
    watchdog: Annotated[HeartbeatWatchdog | None, Depends(get_watchdog)],
) -> HeartbeatResponse:
    """Record a UI heartbeat.

    A no-op when the server is not running under the desktop launcher.
    """
    if watchdog is None:
        return HeartbeatResponse(watching=False)

    last_seen = watchdog.beat()
    return HeartbeatResponse(watching=True, timeout=watchdog.timeout, last_seen=last_seen)
