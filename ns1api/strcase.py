"""Conversion of snake, kebab and space separated words to CamelCase."""

import re

_NUMBER_SEQUENCE = re.compile(r"([a-zA-Z])([0-9]+)([a-zA-Z]?)")
_SEPARATORS = frozenset("_ -")


def _add_word_boundaries_to_numbers(s: str) -> str:
    return _NUMBER_SEQUENCE.sub(r"\1 \2 \3", s)


def to_camel(s: str) -> str:
    """Convert ``s`` to CamelCase, dropping everything but ASCII letters and digits."""
    s = _add_word_boundaries_to_numbers(s).strip()
    parts = []
    capitalize = True
    for char in s:
        if "A" <= char <= "Z" or "0" <= char <= "9":
            parts.append(char)
        elif "a" <= char <= "z":
            parts.append(char.upper() if capitalize else char)
        capitalize = char in _SEPARATORS
    return "".join(parts).strip()