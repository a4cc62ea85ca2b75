"""Desktop shell: launcher, port handling and heartbeat watchdog."""

from infinito_catalog.desktop.ports import NoFreePortError, find_free_port, reclaim_port
from infinito_catalog.desktop.watchdog import HeartbeatWatchdog

__all__ = [
    "HeartbeatWatchdog",
    "NoFreePortError",
    "find_free_port",
    "reclaim_port",
]
