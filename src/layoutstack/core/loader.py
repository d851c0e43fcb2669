"""Read layout and page files from disk.

Files are UTF-8 text with optional YAML front matter; the front matter
becomes the record's metadata and the remainder its content.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from layoutstack.utils.text import parse_frontmatter

from .errors import LayoutValidationError
from .registry import LayoutRegistry
from .types import Layout

logger = logging.getLogger(__name__)


def read_layout(path: Union[str, Path], *, name: Optional[str] = None) -> Layout:
    """Parse one file into a ``Layout``.

    Raises:
        LayoutValidationError: If the front matter is invalid.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        doc = parse_frontmatter(text)
    except ValueError as exc:
        raise LayoutValidationError(f"{path}: {exc}") from exc
    return Layout(content=doc.content, metadata=doc.frontmatter, name=name)


def _iter_files(directory: Union[str, Path], pattern: str) -> List[Path]:
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Layout directory not found: {root}")
    return sorted(p for p in root.glob(pattern) if p.is_file())


def load_layouts(
    registry: LayoutRegistry,
    directory: Union[str, Path],
    pattern: str = "*.hbs",
) -> List[str]:
    """Register every file matching ``pattern`` under its stem.

    Returns:
        Registered names, in sorted file order.
    """
    names: List[str] = []
    for path in _iter_files(directory, pattern):
        registry.set(path.stem, read_layout(path, name=path.stem))
        names.append(path.stem)
    logger.debug("Loaded %d layout(s) from %s", len(names), directory)
    return names


def load_pages(directory: Union[str, Path], pattern: str = "*.hbs") -> List[Layout]:
    """Read every page file matching ``pattern``, in sorted order."""
    return [read_layout(path, name=path.stem) for path in _iter_files(directory, pattern)]


__all__ = ["read_layout", "load_layouts", "load_pages"]
