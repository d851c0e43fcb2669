"""Layout error classes."""
from __future__ import annotations

from typing import List, Optional


class LayoutError(Exception):
    """Base class for layout resolution failures."""
    pass


class LayoutValidationError(LayoutError, ValueError):
    """Raised when a layout or page record is malformed."""
    pass


class LayoutConfigError(LayoutError, ValueError):
    """Raised when layout options are invalid."""
    pass


class LayoutCycleError(LayoutConfigError):
    """Raised when a layout chain references a layout it already contains."""

    def __init__(self, name: str, chain: Optional[List[str]] = None) -> None:
        self.name = name
        self.chain = list(chain or [])
        path = " -> ".join(self.chain) if self.chain else name
        super().__init__(f"Layout cycle detected at '{name}': {path}")


class LayoutNotFoundError(LayoutError, KeyError):
    """Raised in strict mode when a referenced layout is not registered."""

    def __init__(self, name: str, referenced_by: Optional[str] = None) -> None:
        self.name = name
        self.referenced_by = referenced_by
        msg = f"Layout '{name}' not found"
        if referenced_by:
            msg += f" (referenced by '{referenced_by}')"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class PlaceholderNotFoundError(LayoutError):
    """Raised in strict mode when a wrapper has no body placeholder."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No body placeholder found in '{name}'; inner content would be dropped")


__all__ = [
    "LayoutError",
    "LayoutValidationError",
    "LayoutConfigError",
    "LayoutCycleError",
    "LayoutNotFoundError",
    "PlaceholderNotFoundError",
]
