"""Chat server defaults, latency ranking and connection quality results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

FAILED_LATENCY = 9999
"""Latency recorded, in milliseconds, when a test could not reach a server."""

_DEFAULT_SERVERS: tuple[tuple[str, int], ...] = (
    ("42.81.172.81", 80),
    ("114.221.148.59", 14000),
    ("42.81.172.147", 443),
    ("125.94.60.146", 80),
    ("114.221.144.215", 80),
    ("42.81.172.22", 80),
)


@dataclass
class ConnectionQualityInfo:
    """Result of a connection quality test.

    Latencies are in milliseconds, measured by TCP connect; a value of
    ``FAILED_LATENCY`` means the test failed. Packet losses count lost
    probes out of 10.
    """

    chat_server_latency: int = 0
    chat_server_packet_loss: int = 0
    long_message_server_latency: int = 0
    long_message_server_response_latency: int = 0
    srv_server_latency: int = 0
    srv_server_packet_loss: int = 0


def default_servers() -> list[tuple[str, int]]:
    """Return the built-in chat servers used when none can be discovered."""
    return list(_DEFAULT_SERVERS)


def rank_servers(
    servers: Sequence[tuple[str, int]], pings: Sequence[int]
) -> list[tuple[str, int]]:
    """Order servers by ping, fastest first.

    When more than three servers are given only the faster half is kept.
    Servers with equal pings keep their original order.
    """
    if len(servers) != len(pings):
        raise ValueError("servers and pings must have the same length")
    ranked = [server for _, server in sorted(zip(pings, servers), key=lambda pair: pair[0])]
    if len(ranked) > 3:
        ranked = ranked[: len(ranked) // 2]
    return ranked