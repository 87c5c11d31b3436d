"""Public surface for the apply feature."""

from .adapters.filesystem import LocalApplyFilesystem
from .domain.errors import (
    ApplyCancelledError,
    ApplyError,
    InvalidSpriteError,
    MissingInputError,
    SpriteInjectionError,
)
from .domain.models import (
    ApplyConflict,
    ApplyEvent,
    ApplyRequest,
    ApplySuccess,
    OverwriteMode,
)
from .usecases.apply_engine import ApplyEngine
from .usecases.cancellation import CancellationToken
from .usecases.negotiation import (
    ConflictNegotiation,
    ConflictResolution,
    ConflictResolver,
    fixed_resolver,
)
from .usecases.planning import ApplyPlan, TrackDestination, build_plan
from .usecases.ports import ApplyFilesystemPort, ProgressSink, SpriteApplierPort

__all__ = [
    "ApplyCancelledError",
    "ApplyConflict",
    "ApplyEngine",
    "ApplyError",
    "ApplyEvent",
    "ApplyFilesystemPort",
    "ApplyPlan",
    "ApplyRequest",
    "ApplySuccess",
    "CancellationToken",
    "ConflictNegotiation",
    "ConflictResolution",
    "ConflictResolver",
    "InvalidSpriteError",
    "LocalApplyFilesystem",
    "MissingInputError",
    "OverwriteMode",
    "ProgressSink",
    "SpriteApplierPort",
    "SpriteInjectionError",
    "TrackDestination",
    "build_plan",
    "fixed_resolver",
]
