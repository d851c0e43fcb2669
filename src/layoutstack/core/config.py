"""Layout engine options.

Options are resolved once per render call by merging, low -> high precedence:

    engine defaults < registry options < page metadata < per-call overrides

The merge is shallow (a later source replaces a key wholesale), so page
front matter can carry both plain metadata (``title``) and engine options
(``layout``, ``delims``) in one flat mapping. Unknown keys are ignored by
``LayoutsConfig.from_options``.

Option files on disk are a separate, lower layer: ``load_config`` deep-merges
YAML files and validates them against the bundled JSON Schema before they are
handed to a registry.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from layoutstack.utils.io import read_yaml
from layoutstack.utils.merge import deep_merge

from .errors import LayoutConfigError
from .schemas import SchemaValidationError, validate_payload

logger = logging.getLogger(__name__)

DEFAULT_DELIMS: Tuple[str, str] = ("{{", "}}")
DEFAULT_PLACEHOLDER = "{{ body }}"
DEFAULT_MATTER = r"\s*body\s*"
DEFAULT_FLAGS = "gi"
DEFAULT_NEGATIVES: Tuple[Any, ...] = (False, "false", "none", "nil", None, "null")

MATCHER_KINDS = ("regex", "literal")

_FLAG_BITS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}

DEFAULT_OPTIONS: Dict[str, Any] = {
    "delims": list(DEFAULT_DELIMS),
    "default": DEFAULT_PLACEHOLDER,
    "matter": DEFAULT_MATTER,
    "flags": DEFAULT_FLAGS,
    "beginning": "",
    "end": "",
    "negatives": list(DEFAULT_NEGATIVES),
    "matcher": "regex",
    "strict": False,
}

OPTION_KEYS = frozenset(DEFAULT_OPTIONS) | {"expression"}


def resolve_options(*sources: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow-merge option sources left to right; later keys win.

    ``None`` sources are skipped. The result is always a fresh dict.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


def parse_flags(flags: str) -> Tuple[int, bool]:
    """Translate a flag string such as ``"gi"`` into ``(re flags, global)``.

    Raises:
        LayoutConfigError: On unknown flag letters.
    """
    bits = 0
    replace_all = False
    for letter in flags.lower():
        if letter == "g":
            replace_all = True
        elif letter in _FLAG_BITS:
            bits |= _FLAG_BITS[letter]
        else:
            raise LayoutConfigError(f"Unknown matcher flag '{letter}' in {flags!r}")
    return bits, replace_all


def _as_str(options: Mapping[str, Any], key: str) -> str:
    value = options.get(key, DEFAULT_OPTIONS[key])
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LayoutConfigError(f"Option '{key}' must be a string, got {type(value).__name__}")
    return value


_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0", ""}


def _as_bool(options: Mapping[str, Any], key: str) -> bool:
    value = options.get(key, DEFAULT_OPTIONS[key])
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        low = value.strip().lower()
        if low in _TRUE_WORDS:
            return True
        if low in _FALSE_WORDS:
            return False
    raise LayoutConfigError(f"Option '{key}' must be a boolean, got {value!r}")


def _as_delims(value: Any) -> Tuple[str, str]:
    if (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and len(value) == 2
        and all(isinstance(v, str) and v for v in value)
    ):
        return (value[0], value[1])
    raise LayoutConfigError(f"Option 'delims' must be a pair of non-empty strings, got {value!r}")


@dataclass(frozen=True)
class LayoutsConfig:
    """Effective options for one render call."""

    delims: Tuple[str, str] = DEFAULT_DELIMS
    default: str = DEFAULT_PLACEHOLDER
    matter: str = DEFAULT_MATTER
    flags: str = DEFAULT_FLAGS
    beginning: str = ""
    end: str = ""
    negatives: Tuple[Any, ...] = DEFAULT_NEGATIVES
    matcher: str = "regex"
    strict: bool = False

    @property
    def re_flags(self) -> int:
        return parse_flags(self.flags)[0]

    @property
    def replace_all(self) -> bool:
        return parse_flags(self.flags)[1]

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "LayoutsConfig":
        """Build a config from a flat option mapping.

        ``expression`` is accepted as an alias for ``default``. When custom
        delimiters are given without a placeholder text, the placeholder is
        derived from them (``"<% body %>"`` for ``["<%", "%>"]``).

        Page front matter is one of the merged sources, so a page key that
        shares an option name (``end``, ``flags``, ``strict``, ...) is read as
        that option and must have the option's shape. ``strict`` accepts a
        bool or the words true/false, yes/no, on/off, 1/0.

        Raises:
            LayoutConfigError: If any option has an invalid shape.
        """
        options = dict(options or {})
        delims = _as_delims(options.get("delims", DEFAULT_DELIMS))

        if "expression" in options:
            default = _as_str(options, "expression")
        elif "default" in options:
            default = _as_str(options, "default")
        else:
            default = DEFAULT_PLACEHOLDER
        if default == DEFAULT_PLACEHOLDER and delims != DEFAULT_DELIMS:
            default = f"{delims[0]} body {delims[1]}"

        flags = _as_str(options, "flags")
        parse_flags(flags)

        negatives = options.get("negatives", DEFAULT_NEGATIVES)
        if negatives is None:
            negatives = ()
        if isinstance(negatives, (str, bytes)) or not isinstance(negatives, Sequence):
            raise LayoutConfigError(f"Option 'negatives' must be a list, got {negatives!r}")
        try:
            negatives_t = tuple(negatives)
            hash(negatives_t)
        except TypeError as exc:
            raise LayoutConfigError("Option 'negatives' must contain only scalar values") from exc

        matcher = _as_str(options, "matcher")
        if matcher not in MATCHER_KINDS:
            raise LayoutConfigError(
                f"Unknown matcher '{matcher}' (expected one of: {', '.join(MATCHER_KINDS)})"
            )

        return cls(
            delims=delims,
            default=default,
            matter=_as_str(options, "matter"),
            flags=flags,
            beginning=_as_str(options, "beginning"),
            end=_as_str(options, "end"),
            negatives=negatives_t,
            matcher=matcher,
            strict=_as_bool(options, "strict"),
        )

    def to_options(self) -> Dict[str, Any]:
        return {
            "delims": list(self.delims),
            "default": self.default,
            "matter": self.matter,
            "flags": self.flags,
            "beginning": self.beginning,
            "end": self.end,
            "negatives": list(self.negatives),
            "matcher": self.matcher,
            "strict": self.strict,
        }


def load_config(*paths: Union[str, Path]) -> Dict[str, Any]:
    """Load and deep-merge YAML option files (low -> high precedence).

    Missing files are skipped. The merged mapping is validated against the
    bundled ``config`` schema.

    Raises:
        LayoutConfigError: On unreadable YAML, a non-mapping document, or a
            schema violation.
    """
    merged: Dict[str, Any] = {}
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            logger.debug("Skipping missing layout options file %s", path)
            continue
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise LayoutConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise LayoutConfigError(f"Options file {path} must contain a YAML mapping")
        merged = deep_merge(merged, data)
        logger.debug("Loaded layout options from %s", path)

    try:
        validate_payload(merged, "config")
    except SchemaValidationError as exc:
        raise LayoutConfigError(str(exc)) from exc
    return merged


__all__ = [
    "DEFAULT_DELIMS",
    "DEFAULT_PLACEHOLDER",
    "DEFAULT_MATTER",
    "DEFAULT_FLAGS",
    "DEFAULT_NEGATIVES",
    "DEFAULT_OPTIONS",
    "OPTION_KEYS",
    "LayoutsConfig",
    "load_config",
    "parse_flags",
    "resolve_options",
]
