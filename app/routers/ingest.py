"""
Ingest API endpoints.

POST /api/ingest        — structure pasted text → records
POST /api/ingest-file   — upload a file → records or media attributes
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.media import decode_audio, decode_image, detect_kind
from app.pipeline import structure
from app.schemas import (
    ContentKind,
    DeclaredKind,
    IngestRequest,
    IngestResponse,
    Schema,
)
from app.storage import new_blob_id, store, store_audio, store_image

logger = logging.getLogger(__name__)
router = APIRouter()

_DOC_TYPE_HINTS = {
    "logs": DeclaredKind.LOG_HINT,
    "diary": DeclaredKind.EVENT_HINT,
}


def _kind_for(schema: Schema) -> ContentKind:
    return ContentKind.TEXT_LOGS if schema is Schema.LOG else ContentKind.TEXT_EVENTS


# ── POST /api/ingest ─────────────────────────────────────────────────────
@router.post("/ingest", response_model=IngestResponse)
def ingest(req: IngestRequest, db: Session = Depends(get_db)):
    hint = _DOC_TYPE_HINTS.get((req.doc_type or "").strip().lower(), DeclaredKind.NONE)
    logger.info("Ingest: source=%s  hint=%s  len=%d", req.source, hint.value, len(req.raw_text))

    result = structure(req.raw_text, hint)
    kind = _kind_for(result.record_schema)

    blob_id = store(db, new_blob_id(), req.raw_text, kind, result.records, filename=req.source)
    return IngestResponse(
        id=blob_id, kind=kind, record_schema=result.record_schema, records=result.records
    )


# ── POST /api/ingest-file ────────────────────────────────────────────────
@router.post("/ingest-file", response_model=IngestResponse)
async def ingest_file(file: UploadFile = File(...), db: Session = Depends(get_db)):
    data = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if not data:
        raise HTTPException(status_code=400, detail="Missing file")
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    filename = file.filename or "upload.bin"
    content_type = file.content_type or "application/octet-stream"
    kind = detect_kind(content_type, filename)
    blob_id = new_blob_id()
    logger.info("Ingest file: %s  type=%s  kind=%s  size=%d", filename, content_type, kind.value, len(data))

    if kind is ContentKind.IMAGE:
        attrs = decode_image(data, content_type)
        store_image(db, blob_id, filename, content_type, attrs)
        return IngestResponse(id=blob_id, kind=kind, attributes=attrs.model_dump())

    if kind is ContentKind.AUDIO:
        attrs = decode_audio(data, content_type)
        store_audio(db, blob_id, filename, content_type, attrs)
        return IngestResponse(id=blob_id, kind=kind, attributes=attrs.model_dump())

    if kind in (ContentKind.TEXT_EVENTS, ContentKind.TEXT_LOGS):
        raw_text = data.decode("utf-8", errors="replace")[: settings.MAX_TEXT_CHARS]
        hint = DeclaredKind.LOG_HINT if kind is ContentKind.TEXT_LOGS else DeclaredKind.NONE
        result = structure(raw_text, hint)
        kind = _kind_for(result.record_schema)
        store(db, blob_id, raw_text, kind, result.records, filename=filename, content_type=content_type)
        return IngestResponse(
            id=blob_id, kind=kind, record_schema=result.record_schema, records=result.records
        )

    store(db, blob_id, None, ContentKind.UNKNOWN, filename=filename, content_type=content_type)
    return IngestResponse(id=blob_id, kind=ContentKind.UNKNOWN)
