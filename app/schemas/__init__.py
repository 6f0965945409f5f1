from app.schemas.base import (  # noqa: F401
    AudioAttributes,
    ContentKind,
    DeclaredKind,
    Event,
    ImageAttributes,
    IngestRequest,
    IngestResponse,
    LogEvent,
    Record,
    Schema,
    StructureResult,
)
from app.schemas.data import (  # noqa: F401
    AudioFeatureUpdate,
    ImageFeatureUpdate,
    LogEventUpdate,
    TextEventUpdate,
)
