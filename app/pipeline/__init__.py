"""
Text structuring pipeline.

Orchestrates: chunk → classify → extract records.
"""
import logging

from app.pipeline.chunker import split_lines, split_sentences
from app.pipeline.classifier import classify
from app.pipeline.structurer import extract_events, extract_logs
from app.schemas import DeclaredKind, Schema, StructureResult

logger = logging.getLogger(__name__)


def structure(
    raw_text: str, declared_kind: DeclaredKind = DeclaredKind.NONE
) -> StructureResult:
    """Turn *raw_text* into an ordered list of EVENT or LOG records.

    A ``LOG_HINT`` skips classification; any other hint lets the classifier
    decide. Blank input yields an empty EVENT result.
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, not {type(raw_text).__name__}")
    declared_kind = DeclaredKind(declared_kind)

    if not raw_text.strip():
        logger.info("Pipeline — empty input, nothing to structure")
        return StructureResult(record_schema=Schema.EVENT, records=[])

    if declared_kind is DeclaredKind.LOG_HINT:
        schema = Schema.LOG
        logger.info("Pipeline — declared as logs, skipping classification")
    else:
        schema = classify(raw_text)
        logger.info("Classified as: %s", schema.value)

    if schema is Schema.LOG:
        chunks = split_lines(raw_text)
        records = extract_logs(chunks)
    else:
        chunks = split_sentences(raw_text)
        records = extract_events(chunks)

    logger.info("Extracted %d %s records", len(records), schema.value)
    return StructureResult(record_schema=schema, records=records)
