"""
Rule-based field extractors (structurer).

Each chunk becomes exactly one record. Chunks with no recognisable fields
are kept as ``parse_ok=False`` events so every input line stays auditable.
"""
from __future__ import annotations

from typing import Iterable

from app.pipeline.patterns import (
    match_amount,
    match_category,
    match_city,
    match_code,
    match_level,
    match_notes,
    match_person,
    match_service,
    match_timestamp,
)
from app.schemas import Event, LogEvent


def extract_event(chunk: str) -> Event:
    timestamp = match_timestamp(chunk)
    person = match_person(chunk)
    city = match_city(chunk)
    amount = match_amount(chunk)
    category = match_category(chunk)

    # notes always has a fallback, so it never counts towards parse_ok
    parse_ok = any(
        v is not None for v in (timestamp, person, city, amount, category)
    )
    return Event(
        event_timestamp=timestamp,
        person=person,
        city=city,
        amount=amount,
        category=category,
        notes=match_notes(chunk),
        parse_ok=parse_ok,
        source_line=chunk,
    )


def extract_log(chunk: str) -> LogEvent:
    return LogEvent(
        timestamp=match_timestamp(chunk),
        level=match_level(chunk),
        service=match_service(chunk),
        code=match_code(chunk),
        message=chunk,
    )


def extract_events(chunks: Iterable[str]) -> list[Event]:
    return [extract_event(c) for c in chunks]


def extract_logs(chunks: Iterable[str]) -> list[LogEvent]:
    return [extract_log(c) for c in chunks]
