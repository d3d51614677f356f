"""kubedev - infer dev environment manifests from running Kubernetes deployments."""

__version__ = "0.1.0"
