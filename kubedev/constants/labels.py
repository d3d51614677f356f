"""Well-known Kubernetes label and annotation keys."""

from typing import Final

# ============================================================================
# Workload labels
# ============================================================================

# Ordered: the first key carrying a non-empty value names the dev descriptor.
COMPONENT_LABELS: Final = (
    "app.kubernetes.io/component",
    "component",
    "app",
)

# ============================================================================
# Annotations
# ============================================================================

DEPLOYMENT_REVISION_ANNOTATION: Final = "deployment.kubernetes.io/revision"
FLUX_ANNOTATION: Final = "flux.weave.works/antecedent"
FLUX_IGNORE_ANNOTATION: Final = "fluxcd.io/ignore"

__all__ = [
    "COMPONENT_LABELS",
    "DEPLOYMENT_REVISION_ANNOTATION",
    "FLUX_ANNOTATION",
    "FLUX_IGNORE_ANNOTATION",
]
