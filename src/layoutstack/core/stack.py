"""Layout stack resolution.

A page names its first layout through ``layout`` in its metadata; each layout
may name its own parent the same way. ``create_stack`` follows that chain and
returns it outermost-ancestor first:

    page(layout=post) -> post(layout=base) -> base    =>    ["base", "post"]

The walk stops at a negative value (``false``, ``"none"``, ``None``, ...) or at
a name the registry does not know. A name seen twice is a cycle and raises
``LayoutCycleError``.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from .config import DEFAULT_NEGATIVES
from .errors import LayoutCycleError, LayoutNotFoundError
from .registry import LayoutRegistry
from .report import RenderReport

logger = logging.getLogger(__name__)

PAGE_REFERENCE = "<page>"


def is_negative(value: Any, negatives: Sequence[Any] = DEFAULT_NEGATIVES) -> bool:
    """Return True if ``value`` means "no layout".

    ``None`` and empty strings always count. Otherwise ``value`` must equal a
    negatives entry of the same type, so ``0`` never matches ``False``.
    """
    if value is None or value == "":
        return True
    return any(type(neg) is type(value) and neg == value for neg in negatives)


def use_layout(value: Any, negatives: Sequence[Any] = DEFAULT_NEGATIVES) -> Optional[Any]:
    """Return ``value`` if it names a layout, otherwise None."""
    if is_negative(value, negatives):
        return None
    return value


def create_stack(
    layout: Any,
    registry: LayoutRegistry,
    negatives: Sequence[Any] = DEFAULT_NEGATIVES,
    *,
    report: Optional[RenderReport] = None,
    strict: bool = False,
) -> List[str]:
    """Resolve the layout chain starting at ``layout``, outermost first.

    Raises:
        LayoutCycleError: If the chain revisits a layout.
        LayoutNotFoundError: If ``strict`` and a referenced layout is missing.
    """
    stack: List[str] = []
    seen: set = set()
    referenced_by = PAGE_REFERENCE
    name = use_layout(layout, negatives)

    while name is not None:
        record = registry.get(name)
        if record is None:
            if strict:
                raise LayoutNotFoundError(str(name), referenced_by)
            logger.warning("Layout '%s' referenced by '%s' is not registered", name, referenced_by)
            if report is not None:
                report.record_missing_layout(str(name), referenced_by)
            break

        if name in seen:
            raise LayoutCycleError(name, [*reversed(stack), name])
        seen.add(name)
        stack.insert(0, name)
        referenced_by = name
        name = use_layout(record.parent, negatives)

    logger.debug("Resolved layout stack %s", stack)
    return stack


__all__ = ["PAGE_REFERENCE", "create_stack", "is_negative", "use_layout"]
