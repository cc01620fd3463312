"""Tag helper manifests and the binding registry.

Each tag helper is described by a manifest holding its compiled targets.
Requirement sets are parsed once, when the manifest is built, and shared by
every later :meth:`TagHelperRegistry.bind` call. Discovery scans a package for
``TAG_HELPER_MANIFESTS`` constants.
"""

from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass

from .target import HtmlElement, TargetElement


@dataclass(frozen=True, slots=True)
class TagHelperManifest:
    """Manifest for one tag helper.

    Parameters
    ----------
    helper_id : str
        Stable identifier, unique within a registry.
    targets : tuple[TargetElement, ...]
        Compiled targets. The helper binds an element when any target applies.
    description : str, optional
        Human-readable helper summary.
    """

    helper_id: str
    targets: tuple[TargetElement, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.helper_id:
            raise ValueError("helper_id must be a non-empty string")
        if not self.targets:
            raise ValueError(f"tag helper {self.helper_id!r} must declare at least one target")

    def applies_to(self, element: HtmlElement) -> bool:
        """Return whether any target of this helper binds ``element``."""

        return any(target.applies_to(element) for target in self.targets)


class TagHelperRegistry:
    """Registry of tag helper manifests with package auto-discovery."""

    def __init__(self) -> None:
        self._manifests: dict[str, TagHelperManifest] = {}

    def __len__(self) -> int:
        return len(self._manifests)

    def register(self, manifest: TagHelperManifest) -> None:
        """Register one manifest.

        Parameters
        ----------
        manifest : TagHelperManifest
            Manifest to register.

        Raises
        ------
        ValueError
            If a different manifest already exists for the same id.
        """

        existing = self._manifests.get(manifest.helper_id)
        if existing is None:
            self._manifests[manifest.helper_id] = manifest
            return

        if existing != manifest:
            raise ValueError(f"manifest conflict for tag helper {manifest.helper_id!r}; already registered")

    def get(self, helper_id: str) -> TagHelperManifest:
        """Return a manifest by id.

        Raises
        ------
        KeyError
            If no manifest is registered under ``helper_id``.
        """

        return self._manifests[helper_id]

    def list(self) -> tuple[TagHelperManifest, ...]:
        """Return registered manifests sorted by id."""

        return tuple(sorted(self._manifests.values(), key=lambda item: item.helper_id))

    def bind(self, element: HtmlElement) -> tuple[TagHelperManifest, ...]:
        """Return the manifests bound to ``element``, sorted by id.

        Parameters
        ----------
        element : HtmlElement
            Candidate element.

        Returns
        -------
        tuple[TagHelperManifest, ...]
            Manifests having at least one target that applies.
        """

        return tuple(manifest for manifest in self.list() if manifest.applies_to(element))

    def discover(self, package_name: str) -> tuple[TagHelperManifest, ...]:
        """Discover and register manifests in a package tree.

        Parameters
        ----------
        package_name : str
            Package root to scan. Every module may define ``TAG_HELPER_MANIFESTS``.

        Returns
        -------
        tuple[TagHelperManifest, ...]
            Manifests discovered in the package.

        Raises
        ------
        TypeError
            If a module exposes something other than manifests.
        """

        discovered: list[TagHelperManifest] = []
        package = importlib.import_module(package_name)

        modules = [package]
        if hasattr(package, "__path__"):
            for module_info in pkgutil.walk_packages(package.__path__, prefix=package.__name__ + "."):
                modules.append(importlib.import_module(module_info.name))

        for module in modules:
            manifests = getattr(module, "TAG_HELPER_MANIFESTS", ())
            for manifest in manifests:
                if not isinstance(manifest, TagHelperManifest):
                    raise TypeError(
                        f"{module.__name__}.TAG_HELPER_MANIFESTS must contain TagHelperManifest objects"
                    )
                self.register(manifest)
                discovered.append(manifest)

        return tuple(discovered)


__all__ = ["TagHelperManifest", "TagHelperRegistry"]
