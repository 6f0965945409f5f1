"""
Rule-based blob classifier.

A blob is LOG-shaped when any of its first ``LOOKAHEAD_LINES`` lines carries
both a severity token and a ``YYYY-MM-DD`` date. Everything else is treated
as EVENT-shaped text. The decision applies to the whole blob.
"""
from __future__ import annotations

from app.pipeline.chunker import split_lines
from app.pipeline.patterns import DATE_RE, LEVEL_RE
from app.schemas import Schema

LOOKAHEAD_LINES = 20


def is_log_line(line: str) -> bool:
    return bool(LEVEL_RE.search(line)) and bool(DATE_RE.search(line))


def classify(text: str) -> Schema:
    """Return ``Schema.LOG`` or ``Schema.EVENT`` for the whole *text*."""
    for line in split_lines(text)[:LOOKAHEAD_LINES]:
        if is_log_line(line):
            return Schema.LOG
    return Schema.EVENT
