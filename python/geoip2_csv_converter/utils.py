"""Utility helpers shared by the prefix model and the CSV pipeline."""

from __future__ import annotations

import ipaddress
from typing import Union

from dpkt.utils import inet_to_str

CSV_LINE_TERMINATOR = "\n"

NETWORK_COLUMN = "network"
START_IP_COLUMN = "network_start_ip"
LAST_IP_COLUMN = "network_last_ip"
START_INTEGER_COLUMN = "network_start_integer"
LAST_INTEGER_COLUMN = "network_last_integer"
START_HEX_COLUMN = "network_start_hex"
LAST_HEX_COLUMN = "network_last_hex"

_V4_MAPPED_PREFIX = bytes(10) + b"\xff\xff"


def format_ip(value: Union[bytes, bytearray]) -> str:
    """Convert a raw IP buffer into a printable string."""
    value = bytes(value)
    if len(value) == 4:
        return inet_to_str(value)
    if len(value) == 16:
        # IPv4-mapped addresses keep their dotted tail.
        if value[:12] == _V4_MAPPED_PREFIX:
            return "::ffff:" + inet_to_str(value[12:])
        return str(ipaddress.IPv6Address(value))
    raise ValueError(f"Address must be 4 or 16 bytes long, got {len(value)}")


__all__ = [
    "CSV_LINE_TERMINATOR",
    "NETWORK_COLUMN",
    "START_IP_COLUMN",
    "LAST_IP_COLUMN",
    "START_INTEGER_COLUMN",
    "LAST_INTEGER_COLUMN",
    "START_HEX_COLUMN",
    "LAST_HEX_COLUMN",
    "format_ip",
]
