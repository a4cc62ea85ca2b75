"""Port selection and reclamation for the local server."""

import socket

import psutil
import structlog

logger = structlog.get_logger()


class NoFreePortError(RuntimeError):
    """Raised when no port in the scanned range can be bound."""

    def __init__(self, host: str, start: int, attempts: int) -> None:
        super().__init__(
            f"No free port on {host} in range {start}-{start + attempts - 1}"
        )
        self.host = host
        self.start = start
        self.attempts = attempts


def is_port_free(host: str, port: int) -> bool:
    """Check whether a TCP port can be bound."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_free_port(host: str, start: int, attempts: int = 10) -> int:
    """Find the first bindable port, trying `start`, `start + 1`, ...

    Args:
        host: Interface to bind.
        start: First port to try.
        attempts: Number of consecutive ports to try.

    Returns:
        A free port.

    Raises:
        NoFreePortError: If every port in the range is taken.
    """
    for port in range(start, start + attempts):
        if is_port_free(host, port):
            return port
        logger.info("Port busy, trying next", port=port, next_port=port + 1)
    raise NoFreePortError(host, start, attempts)


def reclaim_port(port: int, timeout: float = 3.0) -> list[int]:
    """Terminate processes listening on a port.

    Processes that ignore SIGTERM within `timeout` are killed.

    Args:
        port: TCP port to free.
        timeout: Seconds to wait for graceful termination.

    Returns:
        PIDs that were signalled.
    """
    pids = {
        conn.pid
        for conn in psutil.net_connections(kind="tcp")
        if conn.laddr
        and conn.laddr.port == port
        and conn.status == psutil.CONN_LISTEN
        and conn.pid is not None
    }

    processes = []
    for pid in pids:
        try:
            process = psutil.Process(pid)
            process.terminate()
            processes.append(process)
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning("Cannot terminate port owner", port=port, pid=pid)

    _, alive = psutil.wait_procs(processes, timeout=timeout)
    for process in alive:
        process.kill()

    if processes:
        logger.info("Port reclaimed", port=port, pids=[p.pid for p in processes])
    return [p.pid for p in processes]
