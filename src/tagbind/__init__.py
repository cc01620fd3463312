"""Top-level package for ``tagbind``.

Tag helpers declare the elements they bind to with a tag name, an optional
parent tag and a required-attributes selector such as
``"asp-route-*, [href^='/']"``. The package is organized as:

1. :mod:`tagbind.selectors` parses selector strings into immutable
   requirement descriptors and matches them against element attributes,
2. :mod:`tagbind.binding` compiles target declarations into manifests and
   binds elements to tag helpers through a registry,
3. :mod:`tagbind.cli` exposes parsing, config checks and matching from the
   command line.
"""

from .binding import (
    HtmlElement,
    TagHelperManifest,
    TagHelperRegistry,
    TargetElement,
    compile_target_element,
    load_registry,
)
from .selectors import (
    CssAttributeRequirement,
    CssValueOperator,
    DiagnosticBag,
    DiagnosticKind,
    ParseResult,
    PlainAttributeRequirement,
    SelectorSyntaxError,
    matches,
    parse_required_attributes,
    require_attributes,
    satisfies,
)

__all__ = [
    "CssAttributeRequirement",
    "CssValueOperator",
    "DiagnosticBag",
    "DiagnosticKind",
    "HtmlElement",
    "ParseResult",
    "PlainAttributeRequirement",
    "SelectorSyntaxError",
    "TagHelperManifest",
    "TagHelperRegistry",
    "TargetElement",
    "compile_target_element",
    "load_registry",
    "matches",
    "parse_required_attributes",
    "require_attributes",
    "satisfies",
]
