"""Name grammar of the Dune RPG entities.

A name is a sequence of capitalized words ("Bene Gesserit", "Muad'Dib",
"Al-Dhari") separated by spaces or dashes. Several words may be grouped in
matching quotes (``Paul "Muad'Dib" Atreides``). Lowercase particles such as
"of" or "the" may follow the first word ("Friend of Battle").

Template names may use placeholders such as ``[Skill]`` or ``[Drive2]`` in
place of words.
"""

from __future__ import annotations

import re
from typing import Any

NAME_PARTICLES: frozenset[str] = frozenset(
    {
        "a",
        "al",
        "an",
        "and",
        "at",
        "bin",
        "da",
        "de",
        "del",
        "di",
        "du",
        "el",
        "for",
        "ibn",
        "in",
        "la",
        "le",
        "of",
        "on",
        "the",
        "to",
        "van",
        "von",
    }
)

# Characters joining the parts of a single word
_JOINERS = "-'`´’‐‑‒–—"
_LETTER = r"[^\W\d_]"
_WORD = rf"{_LETTER}+(?:[{_JOINERS}]{_LETTER}+)*"
_SEPARATOR = r"(?:[^\S\r\n\t\f\v]|[-‐-―])"
_PLACEHOLDER = rf"\[{_LETTER}+\d*\]"


def _name_pattern(word: str) -> re.Pattern[str]:
    # Atomic words and possessive repeats: a word is either bare or opens a
    # quoted group, so no part of the text can be matched two ways.
    atom = rf"(?>{word})"
    quoted = rf"(?P<quot>[\"']){atom}(?:{_SEPARATOR}{atom})*+(?P=quot)"
    return re.compile(rf"{atom}(?:{_SEPARATOR}(?:{atom}|{quoted}))*+")


NAME_PATTERN = _name_pattern(_WORD)
NAME_WITH_PLACEHOLDERS_PATTERN = _name_pattern(rf"(?:{_WORD}|{_PLACEHOLDER})")

# Captures the kind and the optional index of each placeholder
PLACEHOLDER_PATTERN = re.compile(r"\[(?P<kind>[^\W\d_]+)(?P<index>\d+)?\]")

_LETTER_RUN = re.compile(_LETTER + "+")


def is_capitalized(word: str) -> bool:
    """An uppercase letter followed by lowercase letters only."""
    return word[:1].isupper() and (len(word) == 1 or word[1:].islower())


def _words_are_capitalized(text: str) -> bool:
    for position, match in enumerate(_LETTER_RUN.finditer(text)):
        run = match.group()
        before = text[match.start() - 1] if match.start() else ""
        tail_is_lower = len(run) > 1 and run[1:].islower()
        if before == "[":
            if not is_capitalized(run):
                return False
        elif before and before in _JOINERS:
            # Joined parts may start with any letter, "Muad'dib"
            if not tail_is_lower:
                return False
        elif not ((run[0].isupper() and tail_is_lower) or (position and run in NAME_PARTICLES)):
            return False
    return True


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    if value is None:
        return False
    try:
        text = value if isinstance(value, str) else str(value)
        return pattern.fullmatch(text) is not None and _words_are_capitalized(text)
    except Exception:
        return False


def is_named(value: Any) -> bool:
    """Test whether the string form of a value is a valid name.

    Args:
        value: The tested value.

    Returns:
        True if str(value) follows the name grammar. Never raises.
    """
    return _matches(NAME_PATTERN, value)


def is_named_with_placeholders(value: Any) -> bool:
    """Test whether the string form of a value is a name with placeholders.

    A plain name is also a name with (zero) placeholders.
    """
    return _matches(NAME_WITH_PLACEHOLDERS_PATTERN, value)
