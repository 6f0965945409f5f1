"""
Split a raw text blob into ordered, trimmed, non-empty chunks.
"""
from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r?\n")
# terminator runs only end a sentence before whitespace or end of line,
# so decimals like "12.50" and times stay intact
_SENTENCE_END = re.compile(r"[.!?]+(?=\s|$)")


def split_lines(text: str) -> tuple[str, ...]:
    return tuple(
        line.strip() for line in _LINE_BREAK.split(text) if line.strip()
    )


def split_sentences(text: str) -> tuple[str, ...]:
    """Line split, then sentence split within each line."""
    chunks: list[str] = []
    for line in split_lines(text):
        for part in _SENTENCE_END.split(line):
            part = part.strip()
            if part:
                chunks.append(part)
    return tuple(chunks)
