"""Build tag helper manifests from declarative config mappings.

Expected shape::

    tag_helpers:
      - id: anchor
        description: Route-aware links
        targets:
          - tag: a
            attributes: "asp-route-*, [href^='/']"
            parent_tag: nav
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from tagbind.core import (
    optional_str,
    require_list,
    require_mapping,
    validate_allowed_keys,
    validate_required_keys,
)
from tagbind.selectors.diagnostics import DiagnosticBag, SelectorDiagnostic, SelectorSyntaxError

from .registry import TagHelperManifest, TagHelperRegistry
from .target import TargetElement, compile_target_element

_ROOT_KEYS = ("tag_helpers",)
_HELPER_KEYS = ("id", "description", "targets")
_TARGET_KEYS = ("tag", "attributes", "parent_tag")
_MANIFEST_FORMATS = {".json": "JSON", ".yaml": "YAML", ".yml": "YAML"}


def manifests_from_config(config: Mapping[str, Any]) -> tuple[TagHelperManifest, ...]:
    """Compile every tag helper declared in ``config``.

    Parameters
    ----------
    config : Mapping[str, Any]
        Config mapping with a ``tag_helpers`` list.

    Returns
    -------
    tuple[TagHelperManifest, ...]
        Manifests in declaration order.

    Raises
    ------
    ValueError
        If the config shape is invalid.
    SelectorSyntaxError
        If any target declaration is invalid. Diagnostics of all helpers are
        collected before raising.
    """

    root = require_mapping(config, field_name="config")
    validate_allowed_keys(root, field_name="config", allowed_keys=_ROOT_KEYS)
    validate_required_keys(root, field_name="config", required_keys=_ROOT_KEYS)

    failures: list[SelectorDiagnostic] = []
    manifests: list[TagHelperManifest] = []
    for helper_index, raw_helper in enumerate(require_list(root["tag_helpers"], field_name="config.tag_helpers")):
        field_name = f"config.tag_helpers[{helper_index}]"
        helper = require_mapping(raw_helper, field_name=field_name)
        validate_allowed_keys(helper, field_name=field_name, allowed_keys=_HELPER_KEYS)
        validate_required_keys(helper, field_name=field_name, required_keys=("id", "targets"))

        helper_id = helper["id"]
        if not isinstance(helper_id, str) or not helper_id:
            raise ValueError(f"{field_name}.id must be a non-empty string")
        description = optional_str(helper.get("description"), field_name=f"{field_name}.description") or ""

        targets: list[TargetElement] = []
        raw_targets = require_list(helper["targets"], field_name=f"{field_name}.targets")
        for target_index, raw_target in enumerate(raw_targets):
            target_field = f"{field_name}.targets[{target_index}]"
            target, diagnostics = _compile_target(raw_target, field_name=target_field)
            failures.extend(_with_context(diagnostics, helper_id=helper_id, target_index=target_index))
            if target is not None:
                targets.append(target)

        if len(targets) == len(raw_targets):
            manifests.append(TagHelperManifest(helper_id=helper_id, targets=tuple(targets), description=description))

    if any(item.is_fatal for item in failures):
        raise SelectorSyntaxError(failures, context="tag helper config")
    return tuple(manifests)


def registry_from_config(config: Mapping[str, Any]) -> TagHelperRegistry:
    """Build a registry holding every manifest declared in ``config``."""

    registry = TagHelperRegistry()
    for manifest in manifests_from_config(config):
        registry.register(manifest)
    return registry


def load_manifest_file(path: str | Path) -> dict[str, Any]:
    """Read one JSON/YAML tag helper manifest file.

    Parameters
    ----------
    path : str | pathlib.Path
        Manifest path ending in `.json`, `.yaml` or `.yml`.

    Returns
    -------
    dict[str, Any]
        Manifest document, not yet validated beyond its root.

    Raises
    ------
    ValueError
        If the suffix is unsupported, the document does not parse, or its root
        is not an object holding `tag_helpers`. Messages start with the path.
    """

    manifest_path = Path(path)
    format_name = _MANIFEST_FORMATS.get(manifest_path.suffix.lower())
    if format_name is None:
        raise ValueError(
            f"{manifest_path}: unsupported manifest file extension {manifest_path.suffix!r}; "
            f"expected one of {sorted(_MANIFEST_FORMATS)}"
        )

    text = manifest_path.read_text(encoding="utf-8")
    try:
        document = json.loads(text) if format_name == "JSON" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"{manifest_path}: invalid {format_name} manifest: {exc}") from exc

    if not isinstance(document, dict):
        raise ValueError(f"{manifest_path}: manifest root must be an object, got {type(document).__name__}")
    if "tag_helpers" not in document:
        raise ValueError(f"{manifest_path}: manifest declares no 'tag_helpers' list")
    return document


def load_registry(path: str | Path) -> TagHelperRegistry:
    """Load a JSON/YAML manifest file into a registry."""

    return registry_from_config(load_manifest_file(path))


def _compile_target(
    raw_target: Any,
    *,
    field_name: str,
) -> tuple[TargetElement | None, tuple[SelectorDiagnostic, ...]]:
    """Compile one target mapping, returning its diagnostics."""

    target = require_mapping(raw_target, field_name=field_name)
    validate_allowed_keys(target, field_name=field_name, allowed_keys=_TARGET_KEYS)
    validate_required_keys(target, field_name=field_name, required_keys=("tag",))

    bag = DiagnosticBag()
    compiled = compile_target_element(
        optional_str(target["tag"], field_name=f"{field_name}.tag"),
        attributes=optional_str(target.get("attributes"), field_name=f"{field_name}.attributes"),
        parent_tag=optional_str(target.get("parent_tag"), field_name=f"{field_name}.parent_tag"),
        sink=bag,
    )
    return compiled, tuple(bag.diagnostics)


def _with_context(
    diagnostics: tuple[SelectorDiagnostic, ...],
    *,
    helper_id: str,
    target_index: int,
) -> list[SelectorDiagnostic]:
    """Prefix diagnostic messages with the helper and target they belong to."""

    return [
        replace(item, message=f"{helper_id} target {target_index}: {item.message}")
        for item in diagnostics
    ]


__all__ = ["load_manifest_file", "load_registry", "manifests_from_config", "registry_from_config"]
