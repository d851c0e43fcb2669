"""
layoutstack - nested layout resolution for static content generation

Resolves a page's chain of parent layouts and flattens it into a single
document, splicing each inner block into its wrapper's body placeholder and
merging front-matter metadata along the way.
"""

__version__ = "0.3.0"

from layoutstack.core import (
    Layout,
    LayoutRegistry,
    Layouts,
    LayoutsConfig,
    RenderResult,
    create_stack,
    flatten,
    render,
)

__all__ = [
    "__version__",
    "Layout",
    "LayoutRegistry",
    "Layouts",
    "LayoutsConfig",
    "RenderResult",
    "create_stack",
    "flatten",
    "render",
]
