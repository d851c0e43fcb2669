"""Shared helpers for layoutstack (merging, YAML I/O, front matter)."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays

__all__ = ["deep_merge", "merge_arrays"]
