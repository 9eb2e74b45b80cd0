# src/auto_reload/connectivity/models.py

from __future__ import annotations

from enum import StrEnum


class ConnectionKind(StrEnum):
    """
    Kind of an active connection as reported by the platform.

    Notes:
    - a report is an ordered list of kinds; the order is kept as reported
    - NONE means "no connection at all", OTHER means "up, but unrecognised"
    """

    WIFI = "wifi"
    MOBILE = "mobile"
    ETHERNET = "ethernet"
    VPN = "vpn"
    BLUETOOTH = "bluetooth"
    OTHER = "other"
    NONE = "none"

    @classmethod
    def from_raw(cls, raw: str | None) -> ConnectionKind:
        if raw is None or not raw.strip():
            return cls.NONE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.OTHER


ConnectivityEvent = list[ConnectionKind]


def parse_kinds(raw: str) -> ConnectivityEvent:
    """Parse "wifi,mobile" / "wifi mobile" into an ordered list of kinds."""
    parts = [p for p in raw.replace(",", " ").split() if p]
    if not parts:
        return [ConnectionKind.NONE]
    return [ConnectionKind.from_raw(p) for p in parts]
