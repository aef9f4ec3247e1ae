"""Expansion of regular-expression alternatives into plain combinations."""

from __future__ import annotations

from .regextext import closing_parenthesis, is_optional_operator

_View = tuple[int, int]


def _starts_with(text: str, pos: int, end: int, marker: str) -> bool:
    return pos + len(marker) <= end and text.startswith(marker, pos)


def _root_alternatives(
    text: str, start: int, end: int, prefix: str, stack: tuple[_View, ...], out: list[str]
) -> bool:
    level = 0
    prev_backslash = False
    pos = start
    while pos < end:
        char = text[pos]
        if not prev_backslash:
            if char == "(":
                level += 1
            elif char == ")":
                if level > 0:
                    level -= 1
            elif char == "[":
                close = closing_parenthesis(text, pos, end)
                if close is not None:
                    pos = close
                    continue
            if level == 0 and char == "|":
                _expand(text, start, pos, prefix, stack, out)
                _expand(text, pos + 1, end, prefix, stack, out)
                return True
        prev_backslash = char == "\\" and not prev_backslash
        pos += 1
    return False


def _root_parentheses(
    text: str, start: int, end: int, prefix: str, stack: tuple[_View, ...], out: list[str]
) -> tuple[bool, str]:
    level = 0
    prev_backslash = False
    pos = start
    while pos < end:
        char = text[pos]
        if not prev_backslash:
            if char == "(":
                level += 1
                if level == 1:
                    close = closing_parenthesis(text, pos, end)
                    if close is None:
                        level -= 1
                        pos += 1
                        continue
                    if is_optional_operator(text, close + 1, end) or _starts_with(
                        text, pos + 1, end, "?!"
                    ):
                        pos = close
                        continue
                    inner = pos + 1
                    if _starts_with(text, inner, end, "?:"):
                        inner += 2
                    _expand(
                        text,
                        inner,
                        close,
                        prefix + text[start:inner],
                        stack + ((close, end),),
                        out,
                    )
                    return True, prefix
            elif char == ")":
                if level > 0:
                    level -= 1
            elif char == "[":
                close = closing_parenthesis(text, pos, end)
                if close is not None:
                    pos = close
                    continue
        prev_backslash = char == "\\" and not prev_backslash
        pos += 1
    return False, prefix + text[start:pos]


def _expand(
    text: str, start: int, end: int, prefix: str, stack: tuple[_View, ...], out: list[str]
) -> None:
    if _root_alternatives(text, start, end, prefix, stack, out):
        return
    handled, prefix = _root_parentheses(text, start, end, prefix, stack, out)
    if handled:
        return
    if not stack:
        out.append(prefix)
    else:
        next_start, next_end = stack[-1]
        _expand(text, next_start, next_end, prefix, stack[:-1], out)


def expand_alternatives(expression: str) -> list[str]:
    """Expand mandatory alternatives of ``expression`` into every combination.

    ``"(Something|Other)/\\d+"`` becomes ``["(Something)/\\d+", "(Other)/\\d+"]``.
    Optional groups, negative lookaheads and character classes are left as they are.
    """
    out: list[str] = []
    _expand(expression, 0, len(expression), "", (), out)
    return out