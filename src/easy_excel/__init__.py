"""
easy_excel: YAML 레이아웃 기반 엑셀(XLSX) 내보내기.

흐름:
    LayoutConfig (YAML) + 레코드 목록
      → DocumentBuilder (헤더/병합/틀 고정, 필드 해석)
      → ExcelExporter (임시 파일 저장 또는 메모리 스트림)
"""

from .core.resolver import FieldResolver, resolve
from .core.storage import ArtifactStore, DeletionQueue
from .domain.errors import (
    ArtifactIOError,
    ArtifactNotFoundError,
    ConfigValidationError,
    DocumentGenerationError,
    ExportError,
    FieldNotFoundError,
)
from .domain.schemas import HeaderCell, LayoutConfig, load_layout_config
from .render.builder import DocumentBuilder
from .services.exporter import ExcelExporter, export

__version__ = "0.1.0"

__all__ = [
    "ExcelExporter",
    "export",
    "DocumentBuilder",
    "LayoutConfig",
    "HeaderCell",
    "load_layout_config",
    "FieldResolver",
    "resolve",
    "ArtifactStore",
    "DeletionQueue",
    # errors
    "ExportError",
    "ConfigValidationError",
    "FieldNotFoundError",
    "DocumentGenerationError",
    "ArtifactIOError",
    "ArtifactNotFoundError",
]
