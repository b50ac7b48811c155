"""
Core layer: 필드 해석, 값 포맷, artifact 저장.

역할:
- resolver: dotted path → 셀 텍스트
- formatting: 날짜/시간 패턴
- storage: 임시 파일 저장 + 삭제 큐
"""

from .formatting import date_format, format_value
from .ids import generate_artifact_name, is_artifact_name
from .resolver import FieldAccessor, FieldResolver, resolve
from .storage import ArtifactStore, DeletionQueue

__all__ = [
    # resolver
    "FieldAccessor",
    "FieldResolver",
    "resolve",
    # formatting
    "format_value",
    "date_format",
    # ids
    "generate_artifact_name",
    "is_artifact_name",
    # storage
    "ArtifactStore",
    "DeletionQueue",
]
