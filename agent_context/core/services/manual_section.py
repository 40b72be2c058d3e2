"""
Manual Additions block — hand-written text that survives regeneration.

The block is delimited by two sentinel lines.  It is sliced out of a
target before the automated sections are rewritten and appended back
verbatim afterwards.  Only the first start and the first end sentinel
count; an end before the start, or a start with no end, means there
is no block.
"""

from __future__ import annotations

from dataclasses import dataclass

MANUAL_START = "<!-- MANUAL ADDITIONS START -->"
MANUAL_END = "<!-- MANUAL ADDITIONS END -->"


@dataclass(frozen=True)
class ManualBlock:
    """A located Manual Additions block.

    ``start`` and ``end`` are the inclusive line indexes of the two
    sentinels; ``text`` keeps the original line endings.
    """

    start: int
    end: int
    text: str


def _split_keepends(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping each line's terminator."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _is_sentinel(line: str, marker: str) -> bool:
    return line.rstrip("\r\n") == marker


def _first_index(lines: list[str], marker: str) -> int | None:
    for index, line in enumerate(lines):
        if _is_sentinel(line, marker):
            return index
    return None


def find_manual_block(text: str) -> ManualBlock | None:
    """Locate the Manual Additions block in ``text``, if any."""
    lines = _split_keepends(text)
    start = _first_index(lines, MANUAL_START)
    end = _first_index(lines, MANUAL_END)
    if start is None or end is None or start > end:
        return None
    return ManualBlock(start=start, end=end, text="".join(lines[start:end + 1]))


def remove_manual_block(text: str, block: ManualBlock) -> str:
    """Drop the block's lines from ``text``."""
    lines = _split_keepends(text)
    return "".join(lines[:block.start] + lines[block.end + 1:])


def strip_stale_sentinels(text: str) -> str:
    """Drop leftover sentinel spans and stray sentinel lines.

    Every start..end span is removed with its content; an unmatched
    start or end line is removed on its own.
    """
    kept: list[str] = []
    pending: list[str] = []
    inside = False
    for line in _split_keepends(text):
        if inside:
            if _is_sentinel(line, MANUAL_END):
                pending = []
                inside = False
            else:
                pending.append(line)
        elif _is_sentinel(line, MANUAL_START):
            inside = True
        elif not _is_sentinel(line, MANUAL_END):
            kept.append(line)
    # Start with no end: only the start line goes
    kept.extend(pending)
    return "".join(kept)


def append_manual_block(text: str, block: ManualBlock) -> str:
    """Append the preserved block at the end of ``text``."""
    if text and not text.endswith("\n"):
        text += "\n"
    return text + block.text
