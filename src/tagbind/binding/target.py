"""Tag helper target elements.

A target element names the tag a tag helper applies to, the attributes that
tag must carry (as a selector string) and optionally the required parent tag.
"""

from __future__ import annotations

from dataclasses import dataclass

from tagbind.selectors.descriptors import RequiredAttribute
from tagbind.selectors.diagnostics import DiagnosticBag, DiagnosticSink
from tagbind.selectors.evaluation import AttributePair, attribute_pairs, satisfies
from tagbind.selectors.matching import names_equal
from tagbind.selectors.names import validate_name
from tagbind.selectors.parser import parse_required_attributes

CATCH_ALL_TAG = "*"


@dataclass(frozen=True, slots=True)
class HtmlElement:
    """Candidate markup element.

    Parameters
    ----------
    tag_name : str
        Element tag name.
    attributes : AttributeInput, optional
        Attribute mapping or ``(name, value)`` pairs. Stored as pairs.
    parent_tag : str | None, optional
        Tag name of the enclosing element, if any.
    """

    tag_name: str
    attributes: tuple[AttributePair, ...] = ()
    parent_tag: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", attribute_pairs(self.attributes))


@dataclass(frozen=True, slots=True)
class TargetElement:
    """Compiled target rule of one tag helper.

    Parameters
    ----------
    tag_name : str
        Targeted tag, or ``"*"`` for every tag.
    required_attributes : tuple[RequiredAttribute, ...], optional
        Attribute requirements the element must satisfy.
    parent_tag : str | None, optional
        Required parent tag. ``None`` accepts any parent.
    """

    tag_name: str
    required_attributes: tuple[RequiredAttribute, ...] = ()
    parent_tag: str | None = None

    @property
    def is_catch_all(self) -> bool:
        return self.tag_name == CATCH_ALL_TAG

    def applies_to(self, element: HtmlElement) -> bool:
        """Return whether ``element`` is bound by this target."""

        if not self.is_catch_all and not names_equal(self.tag_name, element.tag_name):
            return False
        if self.parent_tag is not None and (
            element.parent_tag is None or not names_equal(self.parent_tag, element.parent_tag)
        ):
            return False
        return satisfies(self.required_attributes, element.attributes)


def compile_target_element(
    tag: str | None,
    attributes: str | None = None,
    parent_tag: str | None = None,
    sink: DiagnosticSink | None = None,
) -> TargetElement | None:
    """Validate and compile one target declaration.

    Parameters
    ----------
    tag : str | None
        Tag name, ``"*"`` allowed.
    attributes : str | None, optional
        Required-attribute selector string.
    parent_tag : str | None, optional
        Parent tag name. ``None`` means no restriction.
    sink : DiagnosticSink | None, optional
        Receiver for diagnostics.

    Returns
    -------
    TargetElement | None
        Compiled target, or ``None`` if any part was invalid.

    Notes
    -----
    Tag, attributes and parent tag are all validated even when an earlier one
    fails, so the sink receives every problem of the declaration.
    """

    sink = sink if sink is not None else DiagnosticBag()

    valid_tag = tag == CATCH_ALL_TAG or validate_name(tag, sink=sink, target="tag")
    parsed = parse_required_attributes(attributes, sink)
    valid_parent = parent_tag is None or validate_name(parent_tag, sink=sink, target="parent tag")

    if not (valid_tag and valid_parent) or tag is None or parsed.requirements is None:
        return None
    return TargetElement(tag_name=tag, required_attributes=parsed.requirements, parent_tag=parent_tag)


__all__ = [
    "CATCH_ALL_TAG",
    "HtmlElement",
    "TargetElement",
    "compile_target_element",
]
