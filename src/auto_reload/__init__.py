"""
Connectivity-gated automatic reload of asynchronous requests.

Register named operations with an AutoRequestManager; they are retried on a shared,
exponentially growing interval once a usable connection is reported, until each succeeds.
"""

from .connectivity.models import ConnectionKind
from .connectivity.monitor import ConnectivityMonitor, PsutilConnectivitySource, StaticConnectivitySource
from .connectivity.manual import ManualConnectivitySource
from .reload.backoff import ReloadBackoff
from .reload.manager import AutoRequestManager
from .reload.policies import any_match, first_match, get_policy

__all__ = [
    "AutoRequestManager",
    "ConnectionKind",
    "ConnectivityMonitor",
    "ManualConnectivitySource",
    "PsutilConnectivitySource",
    "ReloadBackoff",
    "StaticConnectivitySource",
    "any_match",
    "first_match",
    "get_policy",
]
