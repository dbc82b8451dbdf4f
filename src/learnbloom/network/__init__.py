"""Network reachability: the connectivity signal and probes."""

from learnbloom.network.connectivity import (
    ConnectivityMonitor,
    NetworkProbeResult,
    probe_connectivity,
    probe_with_retry,
)

__all__ = [
    "ConnectivityMonitor",
    "NetworkProbeResult",
    "probe_connectivity",
    "probe_with_retry",
]
