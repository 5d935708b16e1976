"""Resolve and read the Go source files to scan.

Inputs come from a glob pattern, a comma-separated list, or both.
Pattern matches come first in sorted order, then the explicit list in
the order given; repeated paths keep their first position.

Patterns use Go's syntax (``*``, ``?``, ``[a-z]``, ``[^a-z]``, ``\\``
escapes, also inside classes). glob lists candidates with every class
widened to ``?``; an exact regex then filters them.
"""

from __future__ import annotations

import glob
import re
from pathlib import Path

from .errors import PatternError, SourceError


def _bad_pattern(pattern: str, reason: str) -> PatternError:
    return PatternError(f"syntax error in pattern {pattern!r}: {reason}")


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if i >= len(pattern) or pattern[i] in "-]":
        raise _bad_pattern(pattern, "bad character class")
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise _bad_pattern(pattern, "bad character class")
    return pattern[i], i + 1


def _char_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class opening at pattern[i]; return regex and end index."""
    i += 1
    negate = pattern.startswith("^", i)
    if negate:
        i += 1
    items: list[str] = []
    count = 0
    while count == 0 or i >= len(pattern) or pattern[i] != "]":
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
        count += 1
        # a reversed range is valid and matches nothing
        if lo <= hi:
            items.append(re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}")
    body = "".join(items)
    if negate:
        return f"[^/{body}]", i + 1
    return (f"[{body}]" if body else "(?!)"), i + 1


def _translate(pattern: str) -> tuple[str, re.Pattern[str]]:
    """Validate a Go-style pattern; return a glob and a regex for it."""
    coarse: list[str] = []
    exact: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            if i + 1 >= len(pattern):
                raise _bad_pattern(pattern, "trailing backslash")
            coarse.append(glob.escape(pattern[i + 1]))
            exact.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "[":
            cls, i = _char_class(pattern, i)
            coarse.append("?")
            exact.append(cls)
            continue
        if ch == "*":
            coarse.append("*")
            exact.append("[^/]*")
        elif ch == "?":
            coarse.append("?")
            exact.append("[^/]")
        elif ch == "/":
            coarse.append("/")
            exact.append("/+")
        else:
            coarse.append(glob.escape(ch))
            exact.append(re.escape(ch))
        i += 1
    return "".join(coarse), re.compile("".join(exact))


def match_pattern(pattern: str) -> list[Path]:
    """Return the files matching ``pattern``, sorted."""
    coarse, exact = _translate(pattern)
    return [Path(p) for p in sorted(glob.glob(coarse, include_hidden=True)) if exact.fullmatch(p)]


def split_file_list(files: str) -> list[Path]:
    """Split a comma-separated path list, ignoring blank entries."""
    return [Path(part.strip()) for part in files.split(",") if part.strip()]


def resolve_inputs(pattern: str | None = None, files: str | None = None) -> list[Path]:
    """Return the ordered, de-duplicated list of input files."""
    candidates: list[Path] = []
    if pattern:
        candidates.extend(match_pattern(pattern))
    if files:
        candidates.extend(split_file_list(files))

    seen: set[Path] = set()
    paths: list[Path] = []
    for path in candidates:
        if path not in seen:
            seen.add(path)
            paths.append(path)
    return paths


def read_source(path: Path) -> str:
    """Read one source file as UTF-8 text."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"failed to read {path}: {e}") from e
