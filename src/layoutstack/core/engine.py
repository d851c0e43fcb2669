"""``Layouts``: registry, options and rendering in one object.

Example::

    layouts = Layouts({"delims": ["<%", "%>"]})
    layouts.load("templates/layouts")
    result = layouts.render(page)
    result.content, result.metadata
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union

from .compositor import flatten, render
from .config import DEFAULT_OPTIONS, LayoutsConfig, resolve_options
from .loader import load_layouts
from .registry import LayoutRegistry
from .stack import create_stack, use_layout
from .types import Content, RenderResult


class Layouts(LayoutRegistry):
    """Layout registry that knows how to resolve and render its own stacks."""

    @property
    def config(self) -> LayoutsConfig:
        """Effective instance-level options (defaults < instance options)."""
        return LayoutsConfig.from_options(resolve_options(DEFAULT_OPTIONS, self.options))

    def use_layout(self, layout: Any) -> Optional[Any]:
        """Return ``layout`` if it names a layout under this instance's negatives."""
        return use_layout(layout, self.config.negatives)

    def create_stack(self, options: Union[str, Mapping[str, Any], None] = None) -> List[str]:
        """Resolve a stack from a layout name or an option mapping with ``layout``."""
        if options is None or isinstance(options, Mapping):
            opts = resolve_options(DEFAULT_OPTIONS, self.options, options)
            layout = opts.get("layout")
        else:
            opts = resolve_options(DEFAULT_OPTIONS, self.options)
            layout = options
        config = LayoutsConfig.from_options(opts)
        return create_stack(layout, self, config.negatives, strict=config.strict)

    def render(self, page: Any, options: Optional[Mapping[str, Any]] = None) -> RenderResult:
        return render(page, self, options)

    def flatten(self, page: Any, options: Optional[Mapping[str, Any]] = None) -> Content:
        return flatten(page, self, options)

    def load(self, directory: Union[str, Path], pattern: str = "*.hbs") -> List[str]:
        """Register every layout file in ``directory`` under its file stem."""
        return load_layouts(self, directory, pattern)


__all__ = ["Layouts"]
