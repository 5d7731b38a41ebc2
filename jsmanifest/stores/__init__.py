"""Persistence helpers for generated manifests."""

from .manifest_store import ManifestStore

__all__ = ["ManifestStore"]
