"""Unified interface for all supported storage URLs."""

from .storage_operations import list_storage_contents, new_client, stat_storage

__all__ = ["list_storage_contents", "new_client", "stat_storage"]
