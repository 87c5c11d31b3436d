"""Application services wiring adapters into feature use cases."""

from msupack.application.services.apply_service import (
    ApplyPackService,
    ApplyServiceRequest,
)
from msupack.application.services.library_service import LibraryService

__all__ = ["ApplyPackService", "ApplyServiceRequest", "LibraryService"]
