"""Record types for layouts, pages and render results."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .errors import LayoutValidationError

if TYPE_CHECKING:
    from .report import RenderReport

Content = Union[str, bytes]


@dataclass(frozen=True)
class Layout:
    """A wrapper template: raw content plus its front-matter metadata.

    Pages share the same shape; they are simply never stored in a registry.
    The reserved metadata key ``layout`` names the parent layout.
    """

    content: Content
    metadata: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    @property
    def parent(self) -> Any:
        """Raw parent reference from metadata (may be a negative value)."""
        return self.metadata.get("layout")

    @classmethod
    def coerce(cls, record: Any, *, name: Optional[str] = None) -> "Layout":
        """Build a Layout from a Layout, a mapping, or an attribute-bearing object.

        Mappings and objects may carry metadata under ``metadata`` or ``data``
        (the key front-matter parsers conventionally use). Missing metadata is
        treated as empty; missing or non-text content is rejected.

        Raises:
            LayoutValidationError: If the record has no usable content or its
                metadata is not a mapping.
        """
        label = name or "<page>"
        if isinstance(record, Layout):
            return cls(
                content=record.content,
                metadata=dict(record.metadata),
                name=name if name is not None else record.name,
            )

        if isinstance(record, Mapping):
            if "content" not in record:
                raise LayoutValidationError(f"Layout '{label}' has no 'content' field")
            content = record["content"]
            metadata = record.get("metadata", record.get("data"))
        else:
            if not hasattr(record, "content"):
                raise LayoutValidationError(
                    f"Layout '{label}' must expose 'content' (got {type(record).__name__})"
                )
            content = getattr(record, "content")
            metadata = getattr(record, "metadata", getattr(record, "data", None))

        if not isinstance(content, (str, bytes)):
            raise LayoutValidationError(
                f"Layout '{label}' content must be str or bytes, got {type(content).__name__}"
            )
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, Mapping):
            raise LayoutValidationError(
                f"Layout '{label}' metadata must be a mapping, got {type(metadata).__name__}"
            )
        return cls(content=content, metadata=dict(metadata), name=name)


Page = Layout


@dataclass
class RenderResult:
    """Flattened output of a render call."""

    content: Content
    metadata: Dict[str, Any]
    stack: List[str]
    original: Content
    report: "RenderReport"

    def __str__(self) -> str:
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8")
        return self.content


__all__ = ["Content", "Layout", "Page", "RenderResult"]
