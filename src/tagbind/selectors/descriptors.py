"""Required-attribute descriptors.

A descriptor is one attribute constraint of a tag helper target. Two shapes
exist: plain names (optionally a name prefix) and bracketed CSS-style
selectors with an optional value operator. Each shape only carries the fields
that are legal for it, so e.g. a wildcard prefix on a CSS selector cannot be
constructed.

Notes
-----
Names compare case-insensitively and values compare ordinally. Equality and
hashing of descriptors follow the same rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .names import FORBIDDEN_NAME_CHARACTERS, fold_name, invalid_name_characters

WILDCARD_SUFFIX = "*"


class CssValueOperator(str, Enum):
    """Value operator of a bracketed selector.

    Attributes
    ----------
    NONE
        Attribute presence only.
    EQUALS
        ``[name=value]``: value equals.
    PREFIX
        ``[name^=value]``: value starts with.
    SUFFIX
        ``[name$=value]``: value ends with.
    """

    NONE = ""
    EQUALS = "="
    PREFIX = "^"
    SUFFIX = "$"

    @property
    def token(self) -> str:
        """Selector text of the operator (``"^="`` for :attr:`PREFIX`)."""

        if self is CssValueOperator.NONE:
            return ""
        if self is CssValueOperator.EQUALS:
            return "="
        return f"{self.value}="


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("requirement name must be a non-blank string")
    offending = invalid_name_characters(name)
    if offending:
        raise ValueError(f"requirement name {name!r} contains forbidden characters: {list(offending)}")


def _is_bare_value(value: str) -> bool:
    if not value or value[0] in "\"'":
        return False
    return not any(character.isspace() or character == "]" for character in value)


@dataclass(frozen=True, slots=True, eq=False)
class PlainAttributeRequirement:
    """Bare attribute-name requirement.

    Parameters
    ----------
    name : str
        Attribute name, or name prefix when ``wildcard_prefix`` is set.
    wildcard_prefix : bool, optional
        Match attribute names that strictly extend ``name``.
    """

    name: str
    wildcard_prefix: bool = False

    def __post_init__(self) -> None:
        _check_name(self.name)

    @property
    def is_css_selector(self) -> bool:
        """Plain requirements are not CSS selectors."""

        return False

    @property
    def operator_symbol(self) -> str:
        """``*`` for wildcard prefixes, else ``""``."""

        return WILDCARD_SUFFIX if self.wildcard_prefix else ""

    @property
    def value(self) -> None:
        """Plain requirements never carry a value."""

        return None

    def to_selector(self) -> str:
        """Render as selector text (``name`` or ``name*``)."""

        return f"{self.name}{self.operator_symbol}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainAttributeRequirement):
            return NotImplemented
        return self.wildcard_prefix == other.wildcard_prefix and fold_name(self.name) == fold_name(other.name)

    def __hash__(self) -> int:
        return hash((False, self.wildcard_prefix, fold_name(self.name)))


@dataclass(frozen=True, slots=True, eq=False)
class CssAttributeRequirement:
    """Bracketed CSS-style attribute requirement.

    Parameters
    ----------
    name : str
        Attribute name.
    operator : CssValueOperator, optional
        Value operator. :attr:`CssValueOperator.NONE` means presence only.
    value : str | None, optional
        Operand of ``operator``. Required when an operator is set and
        forbidden otherwise. May be the empty string.
    """

    name: str
    operator: CssValueOperator = CssValueOperator.NONE
    value: str | None = None

    def __post_init__(self) -> None:
        _check_name(self.name)
        if not isinstance(self.operator, CssValueOperator):
            object.__setattr__(self, "operator", CssValueOperator(self.operator))
        if self.operator is CssValueOperator.NONE and self.value is not None:
            raise ValueError("a CSS requirement without operator cannot carry a value")
        if self.operator is not CssValueOperator.NONE and self.value is None:
            raise ValueError(f"CSS operator {self.operator.token!r} requires a value")

    @property
    def is_css_selector(self) -> bool:
        """Bracketed requirements are CSS selectors."""

        return True

    @property
    def operator_symbol(self) -> str:
        """Operator symbol (``=``, ``^``, ``$``) or ``""`` when absent."""

        return self.operator.value

    def to_selector(self) -> str:
        """Render as bracketed selector text.

        Raises
        ------
        ValueError
            If the value needs quoting but contains both quote characters;
            quoted values have no escapes.
        """

        if self.operator is CssValueOperator.NONE:
            return f"[{self.name}]"

        value = self.value or ""
        if _is_bare_value(value):
            return f"[{self.name}{self.operator.token}{value}]"
        if '"' not in value:
            quoted = f'"{value}"'
        elif "'" not in value:
            quoted = f"'{value}'"
        else:
            raise ValueError(f"value {value!r} cannot be quoted without escapes")
        return f"[{self.name}{self.operator.token}{quoted}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CssAttributeRequirement):
            return NotImplemented
        return (
            self.operator is other.operator
            and self.value == other.value
            and fold_name(self.name) == fold_name(other.name)
        )

    def __hash__(self) -> int:
        return hash((True, self.operator, fold_name(self.name), self.value))


RequiredAttribute = Union[PlainAttributeRequirement, CssAttributeRequirement]


def format_requirements(requirements: tuple[RequiredAttribute, ...]) -> str:
    """Render requirements back into one comma-separated selector string."""

    return ", ".join(requirement.to_selector() for requirement in requirements)


__all__ = [
    "CssAttributeRequirement",
    "CssValueOperator",
    "FORBIDDEN_NAME_CHARACTERS",
    "PlainAttributeRequirement",
    "RequiredAttribute",
    "WILDCARD_SUFFIX",
    "format_requirements",
]
