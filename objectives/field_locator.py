"""
Field paths into result documents.

A field path selects one leaf of a parsed result document.  Supported forms::

    Statistics.Sharpe Ratio
    ['Statistics'].['Sharpe Ratio']
    $.runtimeStatistics["Net Profit"]
    rollingWindow[0].sharpe

Only syntax is checked here; whether a path exists in a given document is
decided per document by ``select_token``.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple, Union

from .errors import InvalidArgumentError

Segment = Union[str, int]

_QUOTES = ("'", '"')


def _read_bracket(text: str, start: int, path: str) -> Tuple[Segment, int]:
    """Read one ``[...]`` selector beginning at *start*; return (segment, next index)."""
    j = start + 1
    if j < len(text) and text[j] in _QUOTES:
        close = text.find(text[j] + "]", j + 1)
        if close == -1:
            raise InvalidArgumentError(f"Unterminated quoted selector in field path {path!r}")
        name = text[j + 1:close]
        if not name.strip():
            raise InvalidArgumentError(f"Empty selector in field path {path!r}")
        return name, close + 2

    close = text.find("]", j)
    if close == -1:
        raise InvalidArgumentError(f"Unbalanced '[' in field path {path!r}")
    inner = text[j:close].strip()
    if not (inner.isascii() and inner.isdigit()):
        raise InvalidArgumentError(
            f"Selector [{inner}] in field path {path!r} must be quoted or a non-negative index"
        )
    return int(inner), close + 1


def parse_path(path: str) -> Tuple[Segment, ...]:
    """Split a field path into its name and index segments.

    Raises
    ------
    InvalidArgumentError
        If the path is empty or syntactically malformed.
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgumentError("Field path must be a non-empty string")

    text = path.strip()
    i = 0
    if text.startswith("$"):
        i = 2 if text[1:2] == "." else 1

    segments = []
    expect_segment = True
    while i < len(text):
        ch = text[i]
        if ch == "[":
            segment, i = _read_bracket(text, i, path)
            segments.append(segment)
            expect_segment = False
        elif ch == ".":
            if expect_segment:
                raise InvalidArgumentError(f"Empty segment in field path {path!r}")
            expect_segment = True
            i += 1
        else:
            if not expect_segment:
                raise InvalidArgumentError(f"Missing '.' before {text[i:]!r} in field path {path!r}")
            end = i
            while end < len(text) and text[end] not in ".[":
                end += 1
            name = text[i:end].strip()
            if not name or "]" in name or name[0] in _QUOTES:
                raise InvalidArgumentError(f"Malformed segment {text[i:end]!r} in field path {path!r}")
            segments.append(name)
            expect_segment = False
            i = end

    if expect_segment:
        raise InvalidArgumentError(f"Field path {path!r} does not end with a field name")
    return tuple(segments)


def format_path(segments: Sequence[Segment]) -> str:
    """Render segments in the canonical bracketed form, e.g. ``['Statistics'].['Sharpe Ratio']``."""
    parts = []
    for segment in segments:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
            continue
        quote = '"' if "'" in segment else "'"
        selector = f"[{quote}{segment}{quote}]"
        parts.append(f".{selector}" if parts else selector)
    return "".join(parts)


def select_token(document: Any, segments: Sequence[Segment]) -> Optional[Any]:
    """Return the leaf at *segments* in *document*, or ``None`` when it is absent.

    A JSON ``null`` leaf is indistinguishable from a missing one.
    """
    node = document
    for segment in segments:
        if isinstance(node, Mapping):
            if segment not in node:
                return None
            node = node[segment]
        elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            if isinstance(segment, str):
                if not (segment.isascii() and segment.isdigit()):
                    return None
                segment = int(segment)
            if segment >= len(node):
                return None
            node = node[segment]
        else:
            return None
    return node
