"""
Error definitions for the export engine.

규칙:
- 조용한 실패 금지 → ExportError 계열로 명시적 실패
- 원인 보존: raise ... from e
- dotted path 중간 값이 None → 에러 아님 (빈 문자열)
"""

from typing import Any


class ExportError(Exception):
    """
    엑셀 내보내기 실패 시 발생하는 에러의 공통 부모.

    즉시 중단이 필요한 경우에만 사용:
    - 설정 필수 항목 누락 (file_name, fields)
    - 존재하지 않는 필드 경로
    - 임시 파일 쓰기 실패

    Usage:
        raise FieldNotFoundError(field="user.name", record_type="User")
    """

    code: str = "EXPORT_FAILED"

    def __init__(self, code: str | None = None, **context: Any) -> None:
        if code is not None:
            self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Config ===
    CONFIG_VALIDATION = "CONFIG_VALIDATION"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"

    # === Resolve ===
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"

    # === Build ===
    DOCUMENT_GENERATION_FAILED = "DOCUMENT_GENERATION_FAILED"

    # === Storage ===
    ARTIFACT_IO_FAILURE = "ARTIFACT_IO_FAILURE"
    ARTIFACT_NOT_FOUND = "ARTIFACT_NOT_FOUND"


class ConfigValidationError(ExportError):
    """레이아웃 설정 검증 실패 (문서 생성 전에 중단)."""

    code = ErrorCodes.CONFIG_VALIDATION


class FieldNotFoundError(ExportError):
    """레코드에 존재하지 않는 멤버를 참조하는 필드 경로."""

    code = ErrorCodes.FIELD_NOT_FOUND


class DocumentGenerationError(ExportError):
    """그리드 생성 중 하위 실패. 원인은 __cause__ 로 보존."""

    code = ErrorCodes.DOCUMENT_GENERATION_FAILED


class ArtifactIOError(ExportError):
    """임시 파일 생성/쓰기/읽기 실패."""

    code = ErrorCodes.ARTIFACT_IO_FAILURE


class ArtifactNotFoundError(ExportError):
    """저장소에 없는 artifact 이름."""

    code = ErrorCodes.ARTIFACT_NOT_FOUND
