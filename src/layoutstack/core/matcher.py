"""Body placeholder matching.

A matcher recognises the body placeholder inside a wrapper's content and
splices inner content in its place. Two strategies are available:

- ``RegexMatcher``: ``beginning + open + matter + close + end`` compiled as one
  pattern, so ``{{body}}``, ``{{ BODY }}`` and ``{{  body }}`` all match with
  the default options.
- ``LiteralMatcher``: exact search for the configured placeholder text.

Content may be ``str`` or ``bytes``. When the two sides of a substitution
differ, the text side is UTF-8 encoded and the result is ``bytes``.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional, Pattern, Sequence, Tuple, Union

from .config import DEFAULT_FLAGS, DEFAULT_MATTER, LayoutsConfig, parse_flags
from .errors import LayoutConfigError
from .types import Content

ENCODING = "utf-8"


def coerce_pair(outer: Content, inner: Content) -> Tuple[Content, Content]:
    """Return ``(outer, inner)`` as the same payload type; bytes wins."""
    if isinstance(outer, bytes) and isinstance(inner, str):
        return outer, inner.encode(ENCODING)
    if isinstance(outer, str) and isinstance(inner, bytes):
        return outer.encode(ENCODING), inner
    return outer, inner


class PlaceholderMatcher(ABC):
    """Locates and replaces the body placeholder in wrapper content."""

    def __init__(self, *, replace_all: bool = True) -> None:
        self.replace_all = replace_all

    @abstractmethod
    def count(self, haystack: Content) -> int:
        """Number of placeholder occurrences in ``haystack``."""
        ...

    @abstractmethod
    def _replace(self, haystack: Content, replacement: Content) -> Content:
        ...

    def search(self, haystack: Content) -> bool:
        return self.count(haystack) > 0

    def substitute(self, haystack: Content, replacement: Content) -> Content:
        """Replace the placeholder with ``replacement`` (inserted literally).

        Returns ``haystack`` unchanged (after payload coercion) when there is
        no placeholder. Inputs are never mutated.
        """
        haystack, replacement = coerce_pair(haystack, replacement)
        return self._replace(haystack, replacement)


class RegexMatcher(PlaceholderMatcher):
    """Pattern-based placeholder matcher."""

    def __init__(self, pattern: str, *, flags: int = 0, replace_all: bool = True) -> None:
        super().__init__(replace_all=replace_all)
        try:
            self.pattern: Pattern[str] = re.compile(pattern, flags)
        except re.error as exc:
            raise LayoutConfigError(f"Invalid placeholder pattern {pattern!r}: {exc}") from exc
        self._bytes_pattern: Optional[Pattern[bytes]] = None

    def _pattern_for(self, haystack: Content) -> Union[Pattern[str], Pattern[bytes]]:
        if isinstance(haystack, bytes):
            if self._bytes_pattern is None:
                self._bytes_pattern = re.compile(
                    self.pattern.pattern.encode(ENCODING),
                    self.pattern.flags & ~re.UNICODE,
                )
            return self._bytes_pattern
        return self.pattern

    def count(self, haystack: Content) -> int:
        found = len(self._pattern_for(haystack).findall(haystack))  # type: ignore[arg-type]
        return found if self.replace_all else min(found, 1)

    def _replace(self, haystack: Content, replacement: Content) -> Content:
        pattern = self._pattern_for(haystack)
        # A callable keeps backslashes in the replacement from being expanded.
        return pattern.sub(lambda _m: replacement, haystack, count=0 if self.replace_all else 1)  # type: ignore[arg-type,return-value]


class LiteralMatcher(PlaceholderMatcher):
    """Exact-text placeholder matcher."""

    def __init__(self, token: str, *, ignore_case: bool = False, replace_all: bool = True) -> None:
        super().__init__(replace_all=replace_all)
        if not token:
            raise LayoutConfigError("Literal placeholder text must not be empty")
        self.token = token
        self.ignore_case = ignore_case
        flags = re.IGNORECASE if ignore_case else 0
        self._delegate = RegexMatcher(re.escape(token), flags=flags, replace_all=replace_all)

    def count(self, haystack: Content) -> int:
        if not self.ignore_case:
            token = self.token.encode(ENCODING) if isinstance(haystack, bytes) else self.token
            found = haystack.count(token)  # type: ignore[arg-type]
            return found if self.replace_all else min(found, 1)
        return self._delegate.count(haystack)

    def _replace(self, haystack: Content, replacement: Content) -> Content:
        if not self.ignore_case:
            token = self.token.encode(ENCODING) if isinstance(haystack, bytes) else self.token
            return haystack.replace(token, replacement, -1 if self.replace_all else 1)  # type: ignore[arg-type]
        return self._delegate._replace(haystack, replacement)


def build_pattern(
    delims: Sequence[str],
    matter: str = DEFAULT_MATTER,
    *,
    beginning: str = "",
    end: str = "",
) -> str:
    """Assemble the placeholder regex source from its parts."""
    open_delim, close_delim = delims
    return f"{beginning}{re.escape(open_delim)}{matter}{re.escape(close_delim)}{end}"


def compile(
    delims: Sequence[str],
    matter: str = DEFAULT_MATTER,
    flags: str = DEFAULT_FLAGS,
    *,
    beginning: str = "",
    end: str = "",
) -> RegexMatcher:
    """Compile a regex matcher for ``<open><matter><close>``."""
    bits, replace_all = parse_flags(flags)
    return RegexMatcher(
        build_pattern(delims, matter, beginning=beginning, end=end),
        flags=bits,
        replace_all=replace_all,
    )


@lru_cache(maxsize=64)
def compile_matcher(config: LayoutsConfig) -> PlaceholderMatcher:
    """Return the matcher described by ``config`` (cached per distinct config)."""
    if config.matcher == "literal":
        return LiteralMatcher(
            config.default,
            ignore_case=bool(config.re_flags & re.IGNORECASE),
            replace_all=config.replace_all,
        )
    return compile(
        config.delims,
        config.matter,
        config.flags,
        beginning=config.beginning,
        end=config.end,
    )


def substitute_first(matcher: PlaceholderMatcher, haystack: Content, replacement: Content) -> Content:
    """Functional alias for ``matcher.substitute``."""
    return matcher.substitute(haystack, replacement)


__all__ = [
    "PlaceholderMatcher",
    "RegexMatcher",
    "LiteralMatcher",
    "build_pattern",
    "coerce_pair",
    "compile",
    "compile_matcher",
    "substitute_first",
]
