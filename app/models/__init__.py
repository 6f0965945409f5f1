from app.models.ingest import (  # noqa: F401
    AudioFeatureModel,
    FileIngestModel,
    ImageFeatureModel,
    LogEventModel,
    TextEventModel,
)
