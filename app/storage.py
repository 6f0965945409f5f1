"""
Persistence of raw ingests and the records derived from them.

The structuring pipeline never talks to the database; routers hand its
output to :func:`store` together with the original text.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.config import settings
from app.models import (
    AudioFeatureModel,
    FileIngestModel,
    ImageFeatureModel,
    LogEventModel,
    TextEventModel,
)
from app.schemas import (
    AudioAttributes,
    AudioFeatureUpdate,
    ContentKind,
    Event,
    ImageAttributes,
    ImageFeatureUpdate,
    LogEvent,
    LogEventUpdate,
    Record,
    TextEventUpdate,
)

logger = logging.getLogger(__name__)

# kind → (model, id column name, update schema)
TABLES = {
    ContentKind.TEXT_EVENTS: (TextEventModel, "file_id", TextEventUpdate),
    ContentKind.TEXT_LOGS: (LogEventModel, "file_id", LogEventUpdate),
    ContentKind.IMAGE: (ImageFeatureModel, "id", ImageFeatureUpdate),
    ContentKind.AUDIO: (AudioFeatureModel, "id", AudioFeatureUpdate),
}


def new_blob_id() -> str:
    return str(uuid.uuid4())


def _preview(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text[: settings.NOTES_PREVIEW_CHARS]


def _event_row(blob_id: str, idx: int, rec: Event) -> TextEventModel:
    return TextEventModel(
        file_id=blob_id,
        idx=idx,
        event_ts=rec.event_timestamp,
        person=rec.person,
        city=rec.city,
        amount=rec.amount,
        category=rec.category,
        notes=_preview(rec.notes),
        parse_ok=rec.parse_ok,
        source_line=rec.source_line,
    )


def _log_row(blob_id: str, idx: int, rec: LogEvent) -> LogEventModel:
    return LogEventModel(
        file_id=blob_id,
        idx=idx,
        ts=rec.timestamp,
        level=rec.level,
        service=rec.service,
        code=rec.code,
        message=rec.message,
    )


def store(
    db: Session,
    blob_id: str,
    raw_text: Optional[str],
    content_kind: ContentKind,
    records: Sequence[Record] = (),
    filename: str = "paste",
    content_type: str = "text/plain",
) -> str:
    """Persist the raw ingest and its records in one commit, return *blob_id*."""
    db.add(
        FileIngestModel(
            id=blob_id,
            filename=filename,
            content_type=content_type,
            file_kind=content_kind.value,
            raw_text=raw_text,
        )
    )
    for idx, rec in enumerate(records):
        if isinstance(rec, Event):
            db.add(_event_row(blob_id, idx, rec))
        else:
            db.add(_log_row(blob_id, idx, rec))
    db.commit()
    logger.info("Stored ingest %s (%s) with %d records", blob_id, content_kind.value, len(records))
    return blob_id


def store_image(
    db: Session, blob_id: str, filename: str, content_type: str, attrs: ImageAttributes
) -> str:
    db.add(
        FileIngestModel(
            id=blob_id, filename=filename, content_type=content_type,
            file_kind=ContentKind.IMAGE.value,
        )
    )
    db.add(ImageFeatureModel(id=blob_id, filename=filename, **attrs.model_dump()))
    db.commit()
    logger.info("Stored image features %s", blob_id)
    return blob_id


def store_audio(
    db: Session, blob_id: str, filename: str, content_type: str, attrs: AudioAttributes
) -> str:
    db.add(
        FileIngestModel(
            id=blob_id, filename=filename, content_type=content_type,
            file_kind=ContentKind.AUDIO.value,
        )
    )
    db.add(AudioFeatureModel(id=blob_id, filename=filename, **attrs.model_dump()))
    db.commit()
    logger.info("Stored audio features %s", blob_id)
    return blob_id


def row_to_dict(row) -> dict:
    return {c.name: getattr(row, c.name) for c in row.__table__.columns}
