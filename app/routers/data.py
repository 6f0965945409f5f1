"""
Curated table endpoints.

GET    /api/tables/{kind}       — newest rows of one table
GET    /api/results/{id}        — rows produced by one ingest
PATCH  /api/data/{kind}/{id}    — edit rows of one ingest
DELETE /api/data/{kind}/{id}    — delete rows of one ingest
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.schemas import ContentKind
from app.storage import TABLES, row_to_dict

logger = logging.getLogger(__name__)
router = APIRouter()


def _table(kind: str):
    try:
        return TABLES[ContentKind(kind)]
    except (KeyError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid kind")


def _order(model):
    # text/log rows keep chunk order; media rows have one row per ingest
    return model.idx.asc() if hasattr(model, "idx") else model.id.desc()


# ── GET /api/tables/{kind} ───────────────────────────────────────────────
@router.get("/tables/{kind}")
def list_table(kind: str, db: Session = Depends(get_db)):
    model, _, _ = _table(kind)
    rows = (
        db.query(model)
        .order_by(model.id.desc())
        .limit(settings.TABLE_ROW_LIMIT)
        .all()
    )
    logger.info("Found %d rows in %s", len(rows), model.__tablename__)
    return {"rows": [row_to_dict(r) for r in rows]}


# ── GET /api/results/{blob_id} ───────────────────────────────────────────
@router.get("/results/{blob_id}")
def get_results(blob_id: str, kind: str = ContentKind.TEXT_EVENTS.value, db: Session = Depends(get_db)):
    model, id_col, _ = _table(kind)
    rows = (
        db.query(model)
        .filter(getattr(model, id_col) == blob_id)
        .order_by(_order(model))
        .limit(settings.RESULTS_ROW_LIMIT)
        .all()
    )
    return {"rows": [row_to_dict(r) for r in rows]}


# ── PATCH /api/data/{kind}/{blob_id} ─────────────────────────────────────
@router.patch("/data/{kind}/{blob_id}")
def update_rows(
    kind: str,
    blob_id: str,
    updates: dict = Body(...),
    db: Session = Depends(get_db),
):
    model, id_col, update_schema = _table(kind)
    updates = {k: v for k, v in updates.items() if k.lower() != id_col}
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        values = update_schema(**updates).model_dump(exclude_unset=True)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    affected = (
        db.query(model)
        .filter(getattr(model, id_col) == blob_id)
        .update(values, synchronize_session=False)
    )
    if affected == 0:
        raise HTTPException(
            status_code=404,
            detail=f'0 rows updated. Check primary key column "{id_col}" and id value.',
        )
    db.commit()
    logger.info("Updated %d rows in %s for %s", affected, model.__tablename__, blob_id)
    return {"success": True, "updated": affected}


# ── DELETE /api/data/{kind}/{blob_id} ────────────────────────────────────
@router.delete("/data/{kind}/{blob_id}")
def delete_rows(kind: str, blob_id: str, db: Session = Depends(get_db)):
    model, id_col, _ = _table(kind)
    affected = (
        db.query(model)
        .filter(getattr(model, id_col) == blob_id)
        .delete(synchronize_session=False)
    )
    if affected == 0:
        raise HTTPException(
            status_code=404,
            detail=f'0 rows deleted. Check primary key column "{id_col}" and id value.',
        )
    db.commit()
    logger.info("Deleted %d rows from %s for %s", affected, model.__tablename__, blob_id)
    return {"success": True, "deleted": affected}
