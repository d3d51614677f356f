"""Pydantic models for kubedev."""
