"""Small scanning helpers for regular-expression source text."""

from __future__ import annotations

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_WHITESPACE = " \t\r\n"


def _scan_block(text: str, start: int, end: int | None) -> tuple[int | None, bool]:
    """Find the closing character of the block opened at ``start``.

    Returns the index of the closing character (or None) and whether the
    block holds alternatives: ``|`` at the top of a parenthesised block,
    or any character class.
    """
    limit = len(text) if end is None else min(end, len(text))
    if start >= limit:
        return None, False

    start_char = text[start]
    end_char = _CLOSERS.get(start_char)
    if end_char is None:
        return None, False

    nested = start_char == "("
    level = 1 if nested else 0
    had_alternatives = False

    pos = start + 1
    while pos < limit:
        char = text[pos]
        if char == "\\":
            pos += 1
        elif char == end_char:
            if nested:
                level -= 1
            if level == 0:
                if start_char == "[":
                    had_alternatives = True
                # A ']' right after '[' is a literal, not the end of the class.
                if not (start_char == "[" and pos - start == 1):
                    return pos, had_alternatives
        elif char == start_char:
            if nested:
                level += 1
        elif start_char == "(" and char == "|" and level == 1:
            had_alternatives = True
        pos += 1
    return None, had_alternatives


def closing_parenthesis(text: str, start: int = 0, end: int | None = None) -> int | None:
    """Index of the character closing the (, [ or { block at ``start``, or None."""
    return _scan_block(text, start, end)[0]


def closing_parenthesis_with_alternatives(
    text: str, start: int = 0, end: int | None = None
) -> tuple[int | None, bool]:
    """Like :func:`closing_parenthesis`, also telling whether the block has alternatives."""
    return _scan_block(text, start, end)


def is_optional_operator(text: str, pos: int = 0, end: int | None = None) -> bool:
    """Whether the quantifier at ``pos`` allows zero repetitions: ``*``, ``?``, ``{0..`` or ``{,..``."""
    limit = len(text) if end is None else min(end, len(text))
    if pos >= limit:
        return False
    char = text[pos]
    if char == "{":
        return pos + 1 < limit and text[pos + 1] in "0,"
    return char in "*?"


def trim(text: str) -> str:
    """Strip spaces, tabs, carriage returns and newlines from both ends."""
    return text.strip(_WHITESPACE)