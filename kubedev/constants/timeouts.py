"""Timeout constants for kubectl calls.

All timeout values for API requests and in-container exec probes.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeouts (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45
EXEC_PROBE_TIMEOUT: Final = 20

# ============================================================================
# Async operation timeouts (float, in seconds)
# ============================================================================

CLUSTER_CHECK_TIMEOUT: Final = 12.0

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "EXEC_PROBE_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
]
