"""Name validation shared by attribute, tag and parent-tag names."""

from __future__ import annotations

from .diagnostics import DiagnosticKind, DiagnosticSink, SelectorDiagnostic

FORBIDDEN_NAME_CHARACTERS: frozenset[str] = frozenset("@!</?[>]=\"'*")


def fold_name(name: str) -> str:
    """Upper-case ``name`` one character at a time, keeping its length.

    Characters whose upper-case form is longer than one character (``ß``)
    are kept as they are, so folded names compare ordinally.
    """

    folded = []
    for character in name:
        upper = character.upper()
        folded.append(upper if len(upper) == 1 else character)
    return "".join(folded)


def is_forbidden_name_character(character: str) -> bool:
    """Return whether ``character`` may not appear in a name."""

    return character.isspace() or character in FORBIDDEN_NAME_CHARACTERS


def invalid_name_characters(name: str) -> tuple[str, ...]:
    """Return offending characters of ``name`` in order of appearance.

    Repeated characters are reported once per occurrence.
    """

    return tuple(character for character in name if is_forbidden_name_character(character))


def is_valid_name(name: str | None) -> bool:
    """Return whether ``name`` is non-blank and free of forbidden characters."""

    if name is None or not name.strip():
        return False
    return not invalid_name_characters(name)


def validate_name(
    name: str | None,
    *,
    sink: DiagnosticSink,
    target: str = "attribute",
    location: int = 0,
) -> bool:
    """Validate one name, recording every problem into ``sink``.

    Parameters
    ----------
    name : str | None
        Candidate name.
    sink : DiagnosticSink
        Receiver for diagnostics.
    target : str, optional
        What the name identifies (``"attribute"``, ``"tag"``, ``"parent tag"``).
    location : int, optional
        Offset of the first name character in the enclosing text.

    Returns
    -------
    bool
        ``True`` if the name is valid.

    Notes
    -----
    A blank name yields one diagnostic. Otherwise every forbidden character
    yields its own diagnostic before the name is rejected.
    """

    if name is None or not name.strip():
        sink.on_error(
            SelectorDiagnostic(
                kind=DiagnosticKind.BLANK_NAME,
                message=f"{target.capitalize()} name cannot be null or whitespace.",
                location=location,
                length=0 if name is None else len(name),
            )
        )
        return False

    valid = True
    for offset, character in enumerate(name):
        if not is_forbidden_name_character(character):
            continue
        sink.on_error(
            SelectorDiagnostic(
                kind=DiagnosticKind.INVALID_NAME_CHARACTER,
                message=(
                    f"Invalid {target} name {name!r}: character {character!r} is not allowed."
                ),
                location=location + offset,
                length=1,
                character=character,
            )
        )
        valid = False
    return valid


__all__ = [
    "FORBIDDEN_NAME_CHARACTERS",
    "fold_name",
    "invalid_name_characters",
    "is_forbidden_name_character",
    "is_valid_name",
    "validate_name",
]
