from __future__ import annotations

from types import SimpleNamespace

import pytest

from layoutstack.core import Layout, LayoutRegistry, LayoutValidationError


def test_set_returns_registry_for_chaining() -> None:
    reg = LayoutRegistry()
    out = reg.set("a", Layout(content="A")).set("b", Layout(content="B"))
    assert out is reg
    assert reg.names() == ["a", "b"]
    assert len(reg) == 2


def test_get_unknown_name_returns_none() -> None:
    reg = LayoutRegistry()
    assert reg.get("missing") is None
    assert "missing" not in reg


def test_get_unhashable_reference_returns_none() -> None:
    reg = LayoutRegistry().set("a", Layout(content="A"))
    assert reg.get(["a"]) is None


def test_set_overwrites_existing_layout() -> None:
    reg = LayoutRegistry()
    reg.set("a", Layout(content="first"))
    reg.set("a", Layout(content="second"))
    assert reg.get("a").content == "second"
    assert len(reg) == 1


def test_set_records_layout_name() -> None:
    reg = LayoutRegistry().set("base", Layout(content="<html>{{ body }}</html>"))
    assert reg.get("base").name == "base"


def test_set_accepts_front_matter_mapping_with_data_key() -> None:
    reg = LayoutRegistry()
    reg.set("post", {"content": "<article>{{ body }}</article>", "data": {"layout": "base"}})
    layout = reg.get("post")
    assert isinstance(layout, Layout)
    assert layout.parent == "base"


def test_set_accepts_object_with_attributes() -> None:
    reg = LayoutRegistry()
    reg.set("post", SimpleNamespace(content=b"<p>{{ body }}</p>", metadata={"title": "x"}))
    assert reg.get("post").content == b"<p>{{ body }}</p>"
    assert reg.get("post").metadata == {"title": "x"}


def test_missing_metadata_defaults_to_empty_mapping() -> None:
    reg = LayoutRegistry().set("a", {"content": "A"})
    assert reg.get("a").metadata == {}


def test_stored_metadata_is_a_copy() -> None:
    meta = {"title": "x"}
    reg = LayoutRegistry().set("a", {"content": "A", "metadata": meta})
    meta["title"] = "changed"
    assert reg.get("a").metadata == {"title": "x"}


@pytest.mark.parametrize(
    "record",
    [
        {"metadata": {}},
        {"content": 42, "metadata": {}},
        {"content": "A", "metadata": ["layout", "base"]},
        SimpleNamespace(metadata={}),
        None,
    ],
)
def test_malformed_records_are_rejected(record: object) -> None:
    reg = LayoutRegistry()
    with pytest.raises(LayoutValidationError):
        reg.set("bad", record)
    assert "bad" not in reg


def test_iteration_yields_names_in_insertion_order() -> None:
    reg = LayoutRegistry()
    for name in ("c", "a", "b"):
        reg.set(name, Layout(content=name))
    assert list(reg) == ["c", "a", "b"]


def test_registry_options_are_copied() -> None:
    opts = {"layout": "base"}
    reg = LayoutRegistry(opts)
    opts["layout"] = "other"
    assert reg.options == {"layout": "base"}


def test_stored_metadata_is_a_copy_for_layout_records() -> None:
    meta = {"title": "x"}
    layout = Layout(content="A", metadata=meta, name="a")
    reg = LayoutRegistry().set("a", layout)
    meta["title"] = "changed"
    assert reg.get("a").metadata == {"title": "x"}
    assert reg.get("a") is not layout
