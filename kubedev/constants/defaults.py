"""Default values applied when inferring a dev descriptor.

Fallbacks used when a runtime probe cannot observe a value, and the house
defaults copied into inferred descriptors.
"""

from typing import Final

# ============================================================================
# Probe fallbacks
# ============================================================================

WORKDIR_DEFAULT: Final = "/okteto"

# Shells are probed in this order; the last one is also the fallback command.
SHELL_PREFERENCE: Final = ("bash", "sh")
SHELL_DEFAULT: Final = SHELL_PREFERENCE[-1]

# ============================================================================
# Port forwarding
# ============================================================================

PRIVILEGED_PORT_MAX: Final = 1024
PRIVILEGED_PORT_OFFSET: Final = 8000

# ============================================================================
# Resources
# ============================================================================

# Applied whenever the live container declares any limit.
RESOURCE_LIMIT_CPU_DEFAULT: Final = "1"
RESOURCE_LIMIT_MEMORY_DEFAULT: Final = "2Gi"

# ============================================================================
# CLI defaults
# ============================================================================

NAMESPACE_DEFAULT: Final = "default"
LOG_LEVEL_DEFAULT: Final = "WARNING"

__all__ = [
    "LOG_LEVEL_DEFAULT",
    "NAMESPACE_DEFAULT",
    "PRIVILEGED_PORT_MAX",
    "PRIVILEGED_PORT_OFFSET",
    "RESOURCE_LIMIT_CPU_DEFAULT",
    "RESOURCE_LIMIT_MEMORY_DEFAULT",
    "SHELL_DEFAULT",
    "SHELL_PREFERENCE",
    "WORKDIR_DEFAULT",
]
