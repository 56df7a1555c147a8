"""Addresses the planner can be opened at (this machine and the local network)."""
import socket
from typing import Dict, Optional

LOOPBACK = "127.0.0.1"


def get_local_ip(probe_host: str = "8.8.8.8") -> str:
    """Outgoing interface address, or the loopback address when offline.

    Connecting a UDP socket only selects a route; nothing is sent.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        try:
            s.connect((probe_host, 80))
            return str(s.getsockname()[0])
        except OSError:
            return LOOPBACK


def planner_urls(port: int, local_ip: Optional[str] = None) -> Dict[str, Optional[str]]:
    """{'local': ..., 'lan': ...}; 'lan' is None when no network address was found."""
    ip = local_ip or get_local_ip()
    return {
        "local": f"http://localhost:{port}",
        "lan": f"http://{ip}:{port}" if ip not in (LOOPBACK, "localhost") else None,
    }
