"""Removal of a known local path from log text.

The sensitive root (for example ``C:/Users/me/project``) is cut into its
path segments. Each pass walks the segments in order and removes each one
the line still contains, together with one trailing separator. Once a
segment is missing, or every segment has been removed, a purge marker is
inserted where the first removal happened. Passes repeat on the same line
until one removes nothing, so several occurrences of the path on one line
are all purged.

Only exact, in-order segment matches are removed; paths with a different
root pass through untouched.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from .config import PURGE_MARKER

_SEPARATORS = "\\/"
_SEGMENT_SPLIT = re.compile(r"[\\/]")


def split_root_segments(root: str) -> List[str]:
    """Split a path on both slash styles, dropping empty segments."""
    return [segment for segment in _SEGMENT_SPLIT.split(str(root)) if segment]


def _marker_spans(line: str, marker: str) -> List[Tuple[int, int]]:
    spans = []
    if not marker:
        return spans
    start = line.find(marker)
    while start != -1:
        spans.append((start, start + len(marker)))
        start = line.find(marker, start + len(marker))
    return spans


def _find_unprotected(line: str, segment: str, marker: str) -> int:
    """Index of the first occurrence of ``segment`` outside any purge marker."""
    spans = _marker_spans(line, marker)
    index = line.find(segment)
    while index != -1:
        end = index + len(segment)
        if not any(index < span_end and end > span_start for span_start, span_end in spans):
            return index
        index = line.find(segment, index + 1)
    return -1


def _purge_pass(line: str, segments: Sequence[str], marker: str) -> Tuple[str, bool]:
    modified_at = -1
    for segment in segments:
        index = _find_unprotected(line, segment, marker)
        if index == -1:
            break
        line = line[:index] + line[index + len(segment):]
        if index < len(line) and line[index] in _SEPARATORS:
            line = line[:index] + line[index + 1:]
        modified_at = index if modified_at == -1 else min(modified_at, index)

    if modified_at == -1:
        return line, False
    return line[:modified_at] + marker + line[modified_at:], True


def redact_line(line: str, root: str, marker: str = PURGE_MARKER) -> str:
    """Return ``line`` with occurrences of ``root`` replaced by ``marker``."""
    return PathRedactor(root, marker).redact(line)


class PathRedactor:
    """Redacts one sensitive root path from lines of log text."""

    def __init__(self, root: str, marker: str = PURGE_MARKER) -> None:
        self.root = str(root)
        self.marker = marker
        self.segments = split_root_segments(self.root)

    def redact(self, line: str) -> str:
        if not self.segments:
            return line
        changed = True
        while changed:
            line, changed = _purge_pass(line, self.segments, self.marker)
        return line

    def redact_lines(self, lines: Iterable[str]) -> List[str]:
        return [self.redact(line) for line in lines]


__all__ = ["PathRedactor", "redact_line", "split_root_segments"]
