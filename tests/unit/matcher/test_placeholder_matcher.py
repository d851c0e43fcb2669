from __future__ import annotations

import re

import pytest

from layoutstack.core import LayoutConfigError, LayoutsConfig, LiteralMatcher
from layoutstack.core.matcher import build_pattern, coerce_pair, compile, compile_matcher, substitute_first


@pytest.mark.parametrize("placeholder", ["{{ body }}", "{{body}}", "{{  BODY\t}}", "{{ Body }}"])
def test_default_matcher_recognises_placeholder_variants(placeholder: str) -> None:
    matcher = compile_matcher(LayoutsConfig())
    assert matcher.substitute(f"<p>{placeholder}</p>", "X") == "<p>X</p>"


def test_no_placeholder_returns_haystack_unchanged() -> None:
    matcher = compile_matcher(LayoutsConfig())
    assert not matcher.search("<p>{{ title }}</p>")
    assert matcher.substitute("<p>{{ title }}</p>", "X") == "<p>{{ title }}</p>"


def test_replacement_is_inserted_literally() -> None:
    matcher = compile_matcher(LayoutsConfig())
    inner = r"C:\new\table \1 \g<0>"
    assert matcher.substitute("[{{ body }}]", inner) == f"[{inner}]"


def test_global_flag_replaces_every_occurrence() -> None:
    matcher = compile(("{{", "}}"), r"\s*body\s*", "gi")
    assert matcher.count("{{ body }}|{{ body }}") == 2
    assert matcher.substitute("{{ body }}|{{ body }}", "X") == "X|X"


def test_without_global_flag_only_first_occurrence_is_replaced() -> None:
    matcher = compile(("{{", "}}"), r"\s*body\s*", "i")
    assert matcher.substitute("{{ body }}|{{ body }}", "X") == "X|{{ body }}"


def test_case_sensitive_without_i_flag() -> None:
    matcher = compile(("{{", "}}"), r"\s*body\s*", "g")
    assert matcher.substitute("{{ BODY }}", "X") == "{{ BODY }}"


def test_custom_delimiters_are_escaped() -> None:
    assert build_pattern(("<%", "%>"), "body") == re.escape("<%") + "body" + re.escape("%>")
    matcher = compile_matcher(LayoutsConfig.from_options({"delims": ["<%", "%>"]}))
    assert matcher.substitute("<div><% body %></div>", "X") == "<div>X</div>"
    assert matcher.substitute("<div>{{ body }}</div>", "X") == "<div>{{ body }}</div>"


def test_beginning_and_end_extend_the_pattern() -> None:
    config = LayoutsConfig.from_options({"beginning": r"[ \t]*", "end": r"\n?"})
    matcher = compile_matcher(config)
    assert matcher.substitute("<p>\n  {{ body }}\n</p>", "X") == "<p>\nX</p>"


def test_bytes_haystack_with_text_replacement_yields_bytes() -> None:
    matcher = compile_matcher(LayoutsConfig())
    out = matcher.substitute(b"<p>{{ BODY }}</p>", "caf\u00e9")
    assert out == "<p>caf\u00e9</p>".encode("utf-8")


def test_text_haystack_with_bytes_replacement_yields_bytes() -> None:
    matcher = compile_matcher(LayoutsConfig())
    assert matcher.substitute("<p>{{ body }}</p>", b"X") == b"<p>X</p>"


def test_coerce_pair_leaves_matching_types_alone() -> None:
    assert coerce_pair("a", "b") == ("a", "b")
    assert coerce_pair(b"a", "b") == (b"a", b"b")


def test_invalid_matter_pattern_is_a_config_error() -> None:
    with pytest.raises(LayoutConfigError):
        compile(("{{", "}}"), "(body", "g")


def test_literal_matcher_matches_exact_text_only() -> None:
    matcher = compile_matcher(LayoutsConfig.from_options({"matcher": "literal", "flags": "g"}))
    assert isinstance(matcher, LiteralMatcher)
    assert matcher.substitute("<p>{{ body }}</p>", "X") == "<p>X</p>"
    assert matcher.substitute("<p>{{body}}</p>", "X") == "<p>{{body}}</p>"


def test_literal_matcher_ignores_case_with_i_flag() -> None:
    matcher = compile_matcher(LayoutsConfig.from_options({"matcher": "literal", "flags": "gi"}))
    assert matcher.substitute(b"<p>{{ BODY }}</p>", b"X\\1") == b"<p>X\\1</p>"


def test_literal_matcher_respects_first_only() -> None:
    matcher = LiteralMatcher("@@", replace_all=False)
    assert matcher.count("@@ @@") == 1
    assert matcher.substitute("@@ @@", "X") == "X @@"


def test_compile_matcher_is_cached_per_config() -> None:
    config = LayoutsConfig.from_options({"delims": ["[[", "]]"]})
    assert compile_matcher(config) is compile_matcher(LayoutsConfig.from_options({"delims": ["[[", "]]"]}))
    assert compile_matcher(config) is not compile_matcher(LayoutsConfig())


def test_substitute_first_splices_into_placeholder() -> None:
    matcher = compile_matcher(LayoutsConfig())
    assert substitute_first(matcher, "<html>{{ body }}</html>", "Hi") == "<html>Hi</html>"


def test_substitute_first_without_placeholder_returns_haystack() -> None:
    matcher = compile_matcher(LayoutsConfig())
    haystack = "<html></html>"
    assert substitute_first(matcher, haystack, "Hi") == haystack


def test_substitute_first_leaves_inputs_untouched() -> None:
    matcher = compile_matcher(LayoutsConfig())
    haystack = bytearray(b"<p>{{ body }}</p>")
    replacement = bytearray(b"X")
    out = substitute_first(matcher, bytes(haystack), bytes(replacement))
    assert out == b"<p>X</p>"
    assert haystack == bytearray(b"<p>{{ body }}</p>")
    assert replacement == bytearray(b"X")

    text = "<p>{{ body }}</p>"
    assert substitute_first(matcher, text, "Y") == "<p>Y</p>"
    assert text == "<p>{{ body }}</p>"
