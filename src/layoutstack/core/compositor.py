"""Layout stack flattening.

``render`` folds a resolved stack into one document:

1. Merge options: registry options < page metadata < per-call overrides.
2. Resolve the stack from the page's ``layout`` reference.
3. Seed the accumulator with the placeholder text itself and empty metadata.
4. For each layout, outermost first: merge its metadata over the
   accumulator's, then splice its content into the accumulator's placeholder.
5. Merge the page metadata last and splice the page content in.

Exactly ``len(stack) + 1`` substitution passes happen. Inputs are never
mutated, so concurrent renders over one populated registry are safe.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from .config import DEFAULT_OPTIONS, OPTION_KEYS, LayoutsConfig, resolve_options
from .errors import LayoutConfigError, PlaceholderNotFoundError
from .matcher import PlaceholderMatcher, compile_matcher
from .registry import LayoutRegistry
from .report import RenderReport
from .stack import PAGE_REFERENCE, create_stack
from .types import Content, Layout, RenderResult

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE = "<default>"


def inject(
    outer: Content,
    inner: Content,
    matcher: PlaceholderMatcher,
    *,
    name: str,
    report: Optional[RenderReport] = None,
    strict: bool = False,
) -> Content:
    """Splice ``inner`` into the body placeholder of ``outer``.

    ``name`` identifies the wrapper that owns ``outer``, for diagnostics. A
    missing placeholder leaves ``outer`` unchanged and drops ``inner``.

    Raises:
        PlaceholderNotFoundError: If ``strict`` and ``outer`` has no placeholder.
    """
    if report is not None:
        report.record_pass()
    if not matcher.search(outer):
        if strict:
            raise PlaceholderNotFoundError(name)
        logger.warning("No body placeholder found while wrapping '%s'; inner content dropped", name)
        if report is not None:
            report.record_missing_placeholder(name)
    return matcher.substitute(outer, inner)


def render(
    page: Any,
    registry: LayoutRegistry,
    options: Optional[Mapping[str, Any]] = None,
) -> RenderResult:
    """Flatten ``page`` and its layout chain into a single document.

    Args:
        page: A ``Layout`` or any record exposing ``content`` and
            ``metadata``/``data``.
        registry: Populated layout registry.
        options: Per-call overrides (highest precedence).

    Returns:
        RenderResult with the final content, merged metadata, the resolved
        stack, the page's original content and a diagnostics report.

    Raises:
        LayoutValidationError: If ``page`` is malformed.
        LayoutConfigError: If the merged options are invalid.
        LayoutCycleError: If the layout chain loops.
    """
    record = Layout.coerce(page)
    opts = resolve_options(DEFAULT_OPTIONS, registry.options, record.metadata, options)
    try:
        config = LayoutsConfig.from_options(opts)
    except LayoutConfigError as exc:
        shadowed = sorted(k for k in record.metadata if k in OPTION_KEYS)
        if not shadowed:
            raise
        raise LayoutConfigError(
            f"Page '{record.name or PAGE_REFERENCE}' front matter sets engine option(s) "
            f"{', '.join(shadowed)}: {exc}"
        ) from exc
    matcher = compile_matcher(config)
    report = RenderReport()

    stack = create_stack(
        opts.get("layout"),
        registry,
        config.negatives,
        report=report,
        strict=config.strict,
    )

    content: Content = config.default
    metadata: Dict[str, Any] = {}
    wrapper = DEFAULT_REFERENCE
    for name in stack:
        layout = registry.get(name)
        # create_stack only returns registered names
        assert layout is not None
        metadata.update(layout.metadata)
        content = inject(content, layout.content, matcher, name=wrapper, report=report, strict=config.strict)
        wrapper = name

    metadata.update(record.metadata)
    content = inject(content, record.content, matcher, name=wrapper, report=report, strict=config.strict)

    logger.debug("Rendered page through %d layout(s) in %d pass(es)", len(stack), report.passes)
    return RenderResult(
        content=content,
        metadata=metadata,
        stack=stack,
        original=record.content,
        report=report,
    )


def flatten(
    page: Any,
    registry: LayoutRegistry,
    options: Optional[Mapping[str, Any]] = None,
) -> Content:
    """Return only the flattened content of ``render``."""
    return render(page, registry, options).content


__all__ = ["inject", "render", "flatten"]
