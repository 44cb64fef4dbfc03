"""Identifier grammars and casing helpers for generated modules."""

from __future__ import annotations

import re
from enum import Enum

__all__ = ["NameGrammar", "pascal_case", "validate_identifier"]


_SIMPLE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z_$0-9]*$")
# Dotted or hyphenated names such as ``user-profile.extra``. Runs of dots are
# accepted, a trailing dot is not.
_EXTENDED_IDENTIFIER = re.compile(r"^[A-Za-z](?:(?:[A-Za-z0-9_-]*\.)*[A-Za-z0-9_-]+)?$")
_WORD_SEPARATORS = frozenset(".-_")


class NameGrammar(str, Enum):
    """Strictness applied to user supplied module names."""

    SIMPLE = "simple"
    EXTENDED = "extended"


def validate_identifier(name: str, grammar: NameGrammar = NameGrammar.EXTENDED) -> str | None:
    """Return a human readable reason when ``name`` is not acceptable, else ``None``."""

    if not name:
        return "name can not be empty"

    if grammar is NameGrammar.SIMPLE:
        if not _SIMPLE_IDENTIFIER.match(name):
            return 'name must start with a letter or "_" and contain only letters, digits, "_" or "$"'
        return None

    if not _EXTENDED_IDENTIFIER.match(name):
        return (
            'name must start with a letter and contain only letters, digits, "-", "_" '
            'or "." separators, and must not end with "."'
        )
    return None


def pascal_case(name: str) -> str:
    """Convert ``name`` into a PascalCase class identifier.

    The first character and every character following ``.``, ``-`` or ``_``
    are upper-cased, then the separators are removed::

        >>> pascal_case("user-profile.extra")
        'UserProfileExtra'
    """

    characters: list[str] = []
    capitalize_next = True
    for character in name:
        if character in _WORD_SEPARATORS:
            capitalize_next = True
            continue
        characters.append(character.upper() if capitalize_next else character)
        capitalize_next = False
    return "".join(characters)
