"""Indexing of mandatory literal snippets in regular expressions.

In ``"(a)?(bc)+.* /"`` the snippets ``bc`` and `` /`` must be present in a
string for the expression to match; ``a`` is optional. :class:`SnippetIndex`
finds such snippets in expressions and quickly reports which of them occur
in an input string. :class:`SnippetMapping` then maps a set of found snippets
to the expressions whose mandatory snippets are all present.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .regextext import (
    closing_parenthesis,
    closing_parenthesis_with_alternatives,
    is_optional_operator,
)

_ALWAYS_SNIPPET = frozenset(" _-/,;=%")
_MIN_SNIPPET_LENGTH = 3

E = TypeVar("E", bound=Hashable)


def _is_alnum_ascii(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or ("0" <= char <= "9")


def _is_snippet_char(char: str, prev_was_backslash: bool) -> bool:
    if _is_alnum_ascii(char):
        # Letters and digits count unless escaped (\d, \w, ...).
        return not prev_was_backslash
    if char in _ALWAYS_SNIPPET:
        return True
    # Other characters count only when escaped (\. \( ...).
    return prev_was_backslash


def _to_key(char: str) -> str:
    if "A" <= char <= "Z":
        return char.lower()
    return char


def _skip_block(text: str, pos: int) -> int:
    """Return the position to continue from: the block end if the block is skipped."""
    char = text[pos]
    if char not in "([{":
        return pos
    close, had_alternatives = closing_parenthesis_with_alternatives(text, pos)
    if close is None:
        return pos
    if (
        char == "{"
        or had_alternatives
        or (char == "(" and is_optional_operator(text, close + 1))
    ):
        return close
    return pos


def _has_root_level_alternatives(text: str) -> bool:
    prev_was_backslash = False
    level = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if not prev_was_backslash:
            if char == "(":
                level += 1
            elif char == ")":
                level -= 1
            elif char == "|" and level == 0:
                return True
            elif char == "[":
                # Character-level alternatives such as [a(b|c] do not count.
                close = closing_parenthesis(text, pos)
                if close is not None:
                    pos = close
        prev_was_backslash = text[pos] == "\\" and not prev_was_backslash
        pos += 1
    return False


@dataclass(eq=False)
class _TrieNode:
    parent: _TrieNode | None = None
    transitions: dict[str, _TrieNode] = field(default_factory=dict)
    snippet_id: int = 0


class SnippetIndex:
    """A case-insensitive trie of the mandatory snippets of registered expressions."""

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._max_id = 0

    def register_snippets(self, expression: str) -> tuple[int, ...]:
        """Register the mandatory snippets of ``expression``; return their ids in ascending order.

        Expressions with alternatives at the root level have no mandatory
        snippets and yield an empty tuple.
        """
        found: set[int] = set()
        if _has_root_level_alternatives(expression):
            return ()

        snippet_start = 0
        node: _TrieNode | None = None
        prev_was_backslash = False
        pos = 0
        while pos < len(expression):
            char = expression[pos]
            if _is_snippet_char(char, prev_was_backslash):
                if node is None:
                    snippet_start = pos
                    node = self._root
                key = _to_key(char)
                next_node = node.transitions.get(key)
                if next_node is None:
                    next_node = _TrieNode(parent=node)
                    node.transitions[key] = next_node
                node = next_node
            elif node is not None:
                snippet_end = pos
                if is_optional_operator(expression, snippet_end):
                    # The character before ? or * is optional.
                    snippet_end -= 1
                    node = node.parent
                self._register(snippet_start, snippet_end, node, found)
                node = None

            if not prev_was_backslash:
                pos = _skip_block(expression, pos)

            prev_was_backslash = expression[pos] == "\\" and not prev_was_backslash
            pos += 1

        if node is not None:
            self._register(snippet_start, pos, node, found)

        return tuple(sorted(found))

    def _register(self, start: int, end: int, node: _TrieNode | None, found: set[int]) -> None:
        if node is not None and end - start >= _MIN_SNIPPET_LENGTH:
            if not node.snippet_id:
                self._max_id += 1
                node.snippet_id = self._max_id
            found.add(node.snippet_id)

    def snippets_in(self, text: str) -> tuple[int, ...]:
        """Ids of the registered snippets occurring anywhere in ``text``, ascending."""
        found: set[int] = set()
        for start in range(len(text)):
            node: _TrieNode | None = self._root
            for char in text[start:]:
                node = node.transitions.get(_to_key(char))
                if node is None:
                    break
                if node.snippet_id:
                    found.add(node.snippet_id)
        return tuple(sorted(found))

    def registered_snippets(self) -> dict[int, str]:
        """Map of every registered snippet id to its (lower-cased) text."""
        result: dict[int, str] = {}
        pending: list[tuple[_TrieNode, str]] = [(self._root, "")]
        while pending:
            node, text = pending.pop()
            if node.snippet_id:
                result[node.snippet_id] = text
            pending.extend((child, text + key) for key, child in node.transitions.items())
        return result


@dataclass(eq=False)
class _MappingNode(Generic[E]):
    transitions: dict[int, _MappingNode[E]] = field(default_factory=dict)
    expressions: set[E] = field(default_factory=set)


class SnippetMapping(Generic[E]):
    """Maps sets of required snippet ids to the expressions that need them."""

    def __init__(self) -> None:
        self._root: _MappingNode[E] = _MappingNode()

    def add_mapping(self, snippets: Iterable[int], expression: E) -> None:
        """Record that ``expression`` needs every one of ``snippets`` to be present."""
        node = self._root
        for snippet in sorted(snippets):
            node = node.transitions.setdefault(snippet, _MappingNode())
        node.expressions.add(expression)

    def expressions(self, snippets: Iterable[int]) -> set[E]:
        """Expressions whose required snippets are all among ``snippets``."""
        ordered = sorted(set(snippets))
        result: set[E] = set()
        pending: list[tuple[_MappingNode[E], int]] = [(self._root, 0)]
        while pending:
            node, first = pending.pop()
            result.update(node.expressions)
            for position in range(first, len(ordered)):
                child = node.transitions.get(ordered[position])
                if child is not None:
                    pending.append((child, position + 1))
        return result