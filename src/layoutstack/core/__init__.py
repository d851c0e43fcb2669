"""Core layout engine.

Public API:
- Layouts: registry + options + render facade
- LayoutRegistry: name -> Layout store
- create_stack(): resolve a layout chain, outermost first
- render() / flatten(): fold a stack into one document
- compile_matcher(): build the body placeholder matcher for a config
"""
from __future__ import annotations

from .compositor import flatten, inject, render
from .config import (
    DEFAULT_NEGATIVES,
    DEFAULT_OPTIONS,
    LayoutsConfig,
    load_config,
    resolve_options,
)
from .engine import Layouts
from .errors import (
    LayoutConfigError,
    LayoutCycleError,
    LayoutError,
    LayoutNotFoundError,
    LayoutValidationError,
    PlaceholderNotFoundError,
)
from .loader import load_layouts, load_pages, read_layout
from .matcher import (
    LiteralMatcher,
    PlaceholderMatcher,
    RegexMatcher,
    compile_matcher,
)
from .registry import LayoutRegistry
from .report import RenderReport
from .stack import create_stack, is_negative, use_layout
from .types import Layout, Page, RenderResult

__all__ = [
    # Engine
    "Layouts",
    "LayoutRegistry",
    "render",
    "flatten",
    "inject",
    "create_stack",
    "use_layout",
    "is_negative",
    # Types
    "Layout",
    "Page",
    "RenderResult",
    "RenderReport",
    # Config
    "LayoutsConfig",
    "DEFAULT_OPTIONS",
    "DEFAULT_NEGATIVES",
    "load_config",
    "resolve_options",
    # Matchers
    "PlaceholderMatcher",
    "RegexMatcher",
    "LiteralMatcher",
    "compile_matcher",
    # Loader
    "read_layout",
    "load_layouts",
    "load_pages",
    # Errors
    "LayoutError",
    "LayoutValidationError",
    "LayoutConfigError",
    "LayoutCycleError",
    "LayoutNotFoundError",
    "PlaceholderNotFoundError",
]
