"""
Field-level pattern library.

Every matcher takes one chunk of text and returns the extracted value or
``None``. Matchers never raise on content.

Lookup tables are ordered tuples: the first entry that matches wins,
regardless of where in the text the other candidates appear.
"""
from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

# ---------------------------------------------------------------------------
# Configuration tables
# ---------------------------------------------------------------------------

CURRENCY = "EUR"

CITY_GAZETTEER: tuple[str, ...] = (
    "Vilnius",
    "Kaunas",
    "Klaipėda",
    "Šiauliai",
    "Panevėžys",
    "Alytus",
    "Marijampolė",
    "Mažeikiai",
    "Jonava",
    "Utena",
    "Palanga",
    "Druskininkai",
)

# (keyword regex, category label)
CATEGORY_KEYWORDS: tuple[tuple[str, str], ...] = (
    (r"salad|coffee|lunch|dinner|breakfast|restaurant|cafe|pizza|groceries|food", "Food"),
    (r"bus|taxi|train|ticket|fuel|petrol|parking|flight", "Transport"),
    (r"rent|utilities|electricity|heating|mortgage", "Housing"),
    (r"pharmacy|doctor|dentist|medicine|hospital", "Health"),
    (r"cinema|movie|concert|theatre|museum", "Entertainment"),
    (r"clothes|shoes|shop|store|market", "Shopping"),
)

LOG_LEVELS: tuple[str, ...] = ("INFO", "WARN", "ERROR", "DEBUG")

# Latin letters plus Latin-1 and Lithuanian accented letters
_UPPER = "A-ZÀ-ÖØ-ÞĄČĘĖĮŠŲŪŽ"
_LOWER = "a-zß-öø-ÿąčęėįšųūž"

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIMESTAMP_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2})(?::(\d{2}))?"
)
_CURRENCY_CODE = r"(?:EUR|euros?)\b"
_AMOUNT_RE = re.compile(
    rf"(?<![\d.,])(\d+(?:[.,]\d{{1,2}})?)\s?(?:€|{_CURRENCY_CODE})", re.IGNORECASE
)
_CURRENCY_RE = re.compile(rf"€|\b{_CURRENCY_CODE}", re.IGNORECASE)
_PERSON_RE = re.compile(
    rf"(?<![\w])([{_UPPER}][{_LOWER}]+)\s+([{_UPPER}][{_LOWER}]+)(?![\w])"
)
_CITY_RES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"(?<!\w){re.escape(city)}(?!\w)", re.IGNORECASE), city)
    for city in CITY_GAZETTEER
)
_CATEGORY_TAG_RE = re.compile(r"category\s*=\s*([^|,]*)", re.IGNORECASE)
_CATEGORY_RES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\b(?:{keywords})\b", re.IGNORECASE), label)
    for keywords, label in CATEGORY_KEYWORDS
)
_NOTES_RE = re.compile(r"\bnotes\s*[:=]\s*(.*)$", re.IGNORECASE)
LEVEL_RE = re.compile(r"\b(" + "|".join(LOG_LEVELS) + r")\b", re.IGNORECASE)
_SERVICE_RE = re.compile(r"\b((?:[A-Z][a-z0-9]+)+Service)\b")
_CODE_RE = re.compile(r"\bcode=([A-Za-z0-9_:\-]+)")


# ---------------------------------------------------------------------------
# Event matchers
# ---------------------------------------------------------------------------

def match_timestamp(text: str) -> Optional[datetime]:
    """First ``YYYY-MM-DD[ T]HH:MM[:SS]`` in *text*.

    Minute-precision input comes back with ``second=0``, so it reads the same
    as an explicit ``:00``.
    """
    m = _TIMESTAMP_RE.search(text)
    if not m:
        return None
    year, month, day, hour, minute, second = m.groups()
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second or 0),
        )
    except ValueError:
        return None


def match_amount(text: str) -> Optional[Decimal]:
    m = _AMOUNT_RE.search(text)
    if not m:
        return None
    try:
        value = Decimal(m.group(1).replace(",", "."))
        if not value.is_finite():
            return None
        # overlong literals exceed the context precision here
        return value.quantize(Decimal("0.01"))
    except InvalidOperation:
        return None


def match_currency(text: str) -> Optional[str]:
    return CURRENCY if _CURRENCY_RE.search(text) else None


def match_city(text: str) -> Optional[str]:
    """Gazetteer order decides, not position in *text*."""
    for pattern, city in _CITY_RES:
        if pattern.search(text):
            return city
    return None


def match_person(text: str) -> Optional[str]:
    m = _PERSON_RE.search(text)
    if not m:
        return None
    return f"{m.group(1)} {m.group(2)}"


def match_category(text: str) -> Optional[str]:
    """Explicit ``category = value`` tag first, then the keyword table."""
    tag = _CATEGORY_TAG_RE.search(text)
    if tag and tag.group(1).strip():
        return tag.group(1).strip()
    for pattern, label in _CATEGORY_RES:
        if pattern.search(text):
            return label
    return None


def match_notes(text: str) -> Optional[str]:
    m = _NOTES_RE.search(text)
    if m and m.group(1).strip():
        return m.group(1).strip()
    cleaned = " ".join(text.replace("|", " ").split())
    return cleaned or None


# ---------------------------------------------------------------------------
# Log matchers
# ---------------------------------------------------------------------------

def match_level(text: str) -> Optional[str]:
    m = LEVEL_RE.search(text)
    return m.group(1).upper() if m else None


def match_service(text: str) -> Optional[str]:
    m = _SERVICE_RE.search(text)
    return m.group(1) if m else None


def match_code(text: str) -> Optional[str]:
    m = _CODE_RE.search(text)
    return m.group(1) if m else None
