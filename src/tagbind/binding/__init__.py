"""Tag helper targets, manifests and the binding registry."""

from .config import load_manifest_file, load_registry, manifests_from_config, registry_from_config
from .registry import TagHelperManifest, TagHelperRegistry
from .target import CATCH_ALL_TAG, HtmlElement, TargetElement, compile_target_element

__all__ = [
    "CATCH_ALL_TAG",
    "HtmlElement",
    "TagHelperManifest",
    "TagHelperRegistry",
    "TargetElement",
    "compile_target_element",
    "load_manifest_file",
    "load_registry",
    "manifests_from_config",
    "registry_from_config",
]
