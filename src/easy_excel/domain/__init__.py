"""Domain layer: errors, constants, layout schemas."""

from .errors import (
    ArtifactIOError,
    ArtifactNotFoundError,
    ConfigValidationError,
    DocumentGenerationError,
    ErrorCodes,
    ExportError,
    FieldNotFoundError,
)
from .schemas import CellRange, FreezePane, HeaderCell, LayoutConfig, load_layout_config

__all__ = [
    "ExportError",
    "ErrorCodes",
    "ConfigValidationError",
    "FieldNotFoundError",
    "DocumentGenerationError",
    "ArtifactIOError",
    "ArtifactNotFoundError",
    "LayoutConfig",
    "HeaderCell",
    "CellRange",
    "FreezePane",
    "load_layout_config",
]
