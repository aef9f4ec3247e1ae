"""Parse the user-agent strings of a file repeatedly, for timing the parser."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence

from .parser import UserAgentParser

_USAGE = "Usage: {prog} <regexes.yaml> <input file> <times to repeat>"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    """The integer at the start of ``text``, or 0 when there is none."""
    found = _LEADING_INT.match(text)
    return int(found.group(1)) if found else 0


def _read_lines(path: str) -> list[str]:
    """Lines of ``path`` without their newlines; an unreadable file has none."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            content = handle.read()
    except OSError:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print(_USAGE.format(prog="uaparser-bench"))
        return 1

    regexes, input_path, repeat = args
    lines = _read_lines(input_path)
    parser = UserAgentParser(regexes)

    for _ in range(_leading_int(repeat)):
        for line in lines:
            parser.parse(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())