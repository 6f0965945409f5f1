"""
Upload kind detection and best-effort media metadata decoders.

Decoders never raise: anything a decoder cannot read is reported as an
unknown (``None``) attribute.
"""
from __future__ import annotations

import io
import logging
import math
import re
from datetime import datetime
from typing import Any, Optional

import mutagen
from PIL import Image

from app.schemas import AudioAttributes, ContentKind, ImageAttributes

logger = logging.getLogger(__name__)

_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|webp)$", re.IGNORECASE)
_AUDIO_EXT = re.compile(r"\.(mp3|wav|m4a|aac|flac|ogg)$", re.IGNORECASE)
_LOG_EXT = re.compile(r"\.log$", re.IGNORECASE)
_TEXT_EXT = re.compile(r"\.(txt|csv|eml)$", re.IGNORECASE)

# EXIF tag ids
_MAKE = 0x010F
_MODEL = 0x0110
_EXIF_IFD = 0x8769
_GPS_IFD = 0x8825
_DATETIME_ORIGINAL = 0x9003
_GPS_LAT_REF, _GPS_LAT, _GPS_LON_REF, _GPS_LON = 1, 2, 3, 4


def detect_kind(content_type: Optional[str], filename: Optional[str]) -> ContentKind:
    """Pick the ingest kind from MIME type first, then file extension.

    ``.log`` files are declared logs and skip classification later on.
    """
    ct = (content_type or "").lower()
    name = filename or ""

    if ct.startswith("image/") or _IMAGE_EXT.search(name):
        return ContentKind.IMAGE
    if ct.startswith("audio/") or _AUDIO_EXT.search(name):
        return ContentKind.AUDIO
    if _LOG_EXT.search(name):
        return ContentKind.TEXT_LOGS
    if ct.startswith("text/") or _TEXT_EXT.search(name):
        return ContentKind.TEXT_EVENTS
    return ContentKind.UNKNOWN


def safe_number(x: Any) -> Optional[float]:
    try:
        n = float(x)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def _safe_int(x: Any) -> Optional[int]:
    n = safe_number(x)
    return int(n) if n is not None else None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    value = str(value).strip("\x00 ").strip()
    return value or None


def _exif_datetime(value: Any) -> Optional[datetime]:
    text = _text(value)
    if not text:
        return None
    try:
        return datetime.strptime(text, "%Y:%m:%d %H:%M:%S")
    except ValueError:
        return None


def _gps_degrees(dms: Any, ref: Any) -> Optional[float]:
    """Convert an EXIF (deg, min, sec) triple to signed decimal degrees."""
    if not dms or len(dms) != 3:
        return None
    parts = [safe_number(p) for p in dms]
    if any(p is None for p in parts):
        return None
    deg = parts[0] + parts[1] / 60 + parts[2] / 3600
    if _text(ref) in ("S", "W"):
        deg = -deg
    return safe_number(deg)


def decode_image(data: bytes, content_type: Optional[str] = None) -> ImageAttributes:
    attrs: dict[str, Any] = {}
    try:
        with Image.open(io.BytesIO(data)) as img:
            attrs["width"], attrs["height"] = img.size
            exif = img.getexif()
            if exif:
                attrs["camera_make"] = _text(exif.get(_MAKE))
                attrs["camera_model"] = _text(exif.get(_MODEL))
                attrs["taken_at"] = _exif_datetime(
                    exif.get_ifd(_EXIF_IFD).get(_DATETIME_ORIGINAL)
                )
                gps = exif.get_ifd(_GPS_IFD)
                lat = _gps_degrees(gps.get(_GPS_LAT), gps.get(_GPS_LAT_REF))
                lon = _gps_degrees(gps.get(_GPS_LON), gps.get(_GPS_LON_REF))
                attrs["has_gps"] = lat is not None and lon is not None
                if attrs["has_gps"]:
                    attrs["lat"], attrs["lon"] = lat, lon
    except Exception as e:
        logger.warning("Image metadata unreadable (%s): %s", content_type, e)
    return ImageAttributes(**attrs)


def decode_audio(data: bytes, content_type: Optional[str] = None) -> AudioAttributes:
    try:
        audio = mutagen.File(io.BytesIO(data))
    except Exception as e:
        logger.warning("Audio metadata unreadable (%s): %s", content_type, e)
        return AudioAttributes()
    if audio is None or audio.info is None:
        logger.info("No audio decoder recognised %s payload", content_type)
        return AudioAttributes()

    info = audio.info
    codec = getattr(info, "codec", None) or type(audio).__name__.lower()
    return AudioAttributes(
        duration_s=safe_number(getattr(info, "length", None)),
        codec=codec,
        sample_rate=_safe_int(getattr(info, "sample_rate", None)),
        channels=_safe_int(getattr(info, "channels", None)),
    )
