"""In-memory layout registry.

Load every layout once, then render many pages. ``set`` is the only
mutator; ``get`` and everything built on it are pure reads. No locking is
done here, so population must finish before concurrent renders begin.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .types import Layout

logger = logging.getLogger(__name__)


class LayoutRegistry:
    """Mapping of layout name to ``Layout``, plus registry-level options."""

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self._layouts: Dict[str, Layout] = {}

    def set(self, name: str, layout: Any) -> "LayoutRegistry":
        """Store (or overwrite) a layout under ``name``.

        Accepts a ``Layout`` or any record exposing ``content`` and
        ``metadata``/``data``.

        Raises:
            LayoutValidationError: If the record is malformed.
        """
        record = Layout.coerce(layout, name=name)
        if name in self._layouts:
            logger.debug("Replacing layout '%s'", name)
        self._layouts[name] = record
        return self

    def get(self, name: Any) -> Optional[Layout]:
        """Return the layout stored under ``name``, or None."""
        try:
            return self._layouts.get(name)
        except TypeError:
            # Unhashable references can never name a stored layout.
            return None

    def names(self) -> List[str]:
        """Registered names in insertion order."""
        return list(self._layouts)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._layouts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._layouts))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(layouts={self.names()!r})"


__all__ = ["LayoutRegistry"]
