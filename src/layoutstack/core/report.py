"""Per-render diagnostics.

Rendering never aborts on a broken chain or a wrapper without a body
placeholder (unless strict mode is on); those conditions are collected here
so callers can surface them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class RenderReport:
    """Diagnostics collected while resolving and folding one layout stack."""

    passes: int = 0
    missing_layouts: List[str] = field(default_factory=list)
    missing_placeholders: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.warnings)

    def record_pass(self) -> None:
        self.passes += 1

    def record_missing_layout(self, name: str, referenced_by: str) -> None:
        self.missing_layouts.append(name)
        self.warnings.append(f"Layout '{name}' referenced by '{referenced_by}' is not registered")

    def record_missing_placeholder(self, name: str) -> None:
        self.missing_placeholders.append(name)
        self.warnings.append(f"No body placeholder in '{name}'; inner content dropped")


__all__ = ["RenderReport"]
