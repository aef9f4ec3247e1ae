"""Regular-expression matching with fixed capture slots and $N replacement templates."""

from __future__ import annotations

import re
from dataclasses import dataclass

MAX_MATCHES = 10

_PLACEHOLDER = re.compile(r"\$([0-9])")


@dataclass(frozen=True)
class Match:
    """Captured groups of a successful match; index 0 is the whole match."""

    groups: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.groups)

    def get(self, index: int) -> str:
        """The captured text at ``index``, or an empty string when there is none."""
        if 0 <= index < len(self.groups):
            return self.groups[index]
        return ""


class Pattern:
    """A compiled expression that searches anywhere in a string.

    At most ``MAX_MATCHES`` groups (the whole match included) are kept; groups
    that took no part in the match come back as empty strings.
    """

    def __init__(self, pattern: str, case_sensitive: bool = True) -> None:
        self.pattern = pattern
        self.case_sensitive = case_sensitive
        self._regex = re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
        self._group_count = min(self._regex.groups + 1, MAX_MATCHES)

    def __repr__(self) -> str:
        return f"Pattern({self.pattern!r}, case_sensitive={self.case_sensitive})"

    def match(self, text: str) -> Match | None:
        """Search ``text``; return the captured groups, or None when nothing matches."""
        found = self._regex.search(text)
        if found is None:
            return None
        values = (found.group(0), *found.groups())[: self._group_count]
        return Match(tuple(value or "" for value in values))


class ReplaceTemplate:
    """A string in which ``$0`` to ``$9`` stand for captured groups."""

    def __init__(self, template: str) -> None:
        self.template = template
        parts = _PLACEHOLDER.split(template)
        self._chunks = tuple(parts[0::2])
        self._indices = tuple(int(digit) for digit in parts[1::2])

    def __repr__(self) -> str:
        return f"ReplaceTemplate({self.template!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReplaceTemplate):
            return NotImplemented
        return self.template == other.template

    def __hash__(self) -> int:
        return hash(self.template)

    def expand(self, match: Match) -> str:
        """Fill the placeholders with the groups of ``match``."""
        if not self._indices:
            return self._chunks[0]
        pieces = [self._chunks[0]]
        for index, chunk in zip(self._indices, self._chunks[1:]):
            pieces.append(match.get(index))
            pieces.append(chunk)
        return "".join(pieces)