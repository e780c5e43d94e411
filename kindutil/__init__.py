"""Kubeconfig, YAML patching and terminal spinner helpers for local Kubernetes cluster tooling."""

__version__ = "0.1.0"