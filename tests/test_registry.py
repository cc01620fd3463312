"""Tests for tag helper manifests, binding and auto-discovery."""

from __future__ import annotations

import pytest

from tagbind.binding import HtmlElement, TagHelperManifest, TagHelperRegistry, compile_target_element


def _manifest(helper_id: str, tag: str, attributes: str | None = None) -> TagHelperManifest:
    """Build one single-target manifest."""

    target = compile_target_element(tag, attributes=attributes)
    assert target is not None
    return TagHelperManifest(helper_id=helper_id, targets=(target,))


def test_bind_returns_helpers_with_an_applicable_target() -> None:
    """Registry should bind every helper whose targets accept the element."""

    registry = TagHelperRegistry()
    registry.register(_manifest("anchor", "a", "asp-route-*"))
    registry.register(_manifest("button", "button", "[type=submit]"))
    registry.register(_manifest("any-for", "*", "asp-for"))

    bound = registry.bind(HtmlElement("a", {"asp-route-id": "1", "asp-for": "X"}))

    assert [manifest.helper_id for manifest in bound] == ["anchor", "any-for"]
    assert registry.bind(HtmlElement("a", {"asp-route-": "1"})) == ()


def test_manifest_binds_when_any_target_applies() -> None:
    """Targets of one manifest are alternatives."""

    form = compile_target_element("form")
    submit = compile_target_element("input", attributes="[type=submit]")
    assert form is not None and submit is not None
    manifest = TagHelperManifest(helper_id="form", targets=(form, submit))

    assert manifest.applies_to(HtmlElement("form")) is True
    assert manifest.applies_to(HtmlElement("input", {"type": "submit"})) is True
    assert manifest.applies_to(HtmlElement("input", {"type": "text"})) is False


def test_manifest_requires_id_and_targets() -> None:
    """Manifests without id or targets should be rejected."""

    target = compile_target_element("a")
    assert target is not None

    with pytest.raises(ValueError, match="helper_id"):
        TagHelperManifest(helper_id="", targets=(target,))
    with pytest.raises(ValueError, match="at least one target"):
        TagHelperManifest(helper_id="empty", targets=())


def test_register_is_idempotent_but_rejects_conflicts() -> None:
    """Re-registering an identical manifest is a no-op; a different one fails."""

    registry = TagHelperRegistry()
    registry.register(_manifest("anchor", "a", "href"))
    registry.register(_manifest("anchor", "a", "HREF"))

    assert len(registry) == 1

    with pytest.raises(ValueError, match="manifest conflict"):
        registry.register(_manifest("anchor", "a", "[href]"))


def test_get_unknown_helper_raises_key_error() -> None:
    """Unknown ids should fail with KeyError."""

    with pytest.raises(KeyError):
        TagHelperRegistry().get("missing")


def test_discover_registers_manifests_from_package(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Discovery should collect ``TAG_HELPER_MANIFESTS`` from every module."""

    package = tmp_path / "sample_helpers"
    package.mkdir()
    (package / "__init__.py").write_text("", encoding="utf-8")
    (package / "links.py").write_text(
        "from tagbind.binding import TagHelperManifest, compile_target_element\n"
        "\n"
        "TAG_HELPER_MANIFESTS = (\n"
        "    TagHelperManifest(\n"
        "        helper_id='anchor',\n"
        "        targets=(compile_target_element('a', attributes='asp-route-*'),),\n"
        "    ),\n"
        ")\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    registry = TagHelperRegistry()
    discovered = registry.discover("sample_helpers")
    registry.discover("sample_helpers")

    assert [manifest.helper_id for manifest in discovered] == ["anchor"]
    assert [manifest.helper_id for manifest in registry.list()] == ["anchor"]
    assert registry.get("anchor").applies_to(HtmlElement("a", {"asp-route-id": "1"})) is True


def test_discover_rejects_non_manifest_entries(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Discovery should fail on foreign objects in ``TAG_HELPER_MANIFESTS``."""

    package = tmp_path / "broken_helpers"
    package.mkdir()
    (package / "__init__.py").write_text("TAG_HELPER_MANIFESTS = ('anchor',)\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(TypeError, match="must contain TagHelperManifest objects"):
        TagHelperRegistry().discover("broken_helpers")
