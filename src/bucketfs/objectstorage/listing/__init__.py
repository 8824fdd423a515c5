"""Filesystem-style listing of object storage."""

from .entries import NormalizedName, normalize_name, normalize_prefix, recursive_name
from .recursive import list_recursive
from .shallow import list_prefix, list_shallow

__all__ = [
    "NormalizedName",
    "list_prefix",
    "list_recursive",
    "list_shallow",
    "normalize_name",
    "normalize_prefix",
    "recursive_name",
]
