"""
Artifact 이름 생성.

포맷: {file_name}_{uuid4}.{extension}
예: users_1b4e28ba-2fa1-11d2-883f-0016d3cca427.xlsx
"""

import re
import uuid

from easy_excel.domain.constants import XLSX

_UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"

# 파일명으로 쓸 수 없는 문자 (경로 구분자 포함)
FORBIDDEN_CHARS = set('/\\:*?"<>|\0')


def generate_artifact_name(file_name: str, extension: str = XLSX) -> str:
    """
    고유한 artifact 이름 생성.

    고유성 보장: UUID v4

    Args:
        file_name: 레이아웃의 fileName
        extension: 확장자 (점 제외)

    Returns:
        artifact 이름
    """
    return f"{file_name}_{uuid.uuid4()}.{extension}"


def is_artifact_name(name: str, file_name: str | None = None, extension: str = XLSX) -> bool:
    """
    generate_artifact_name() 형식인지 확인.

    Args:
        name: 검사할 이름
        file_name: 지정 시 접두어까지 일치해야 함
        extension: 확장자
    """
    prefix = re.escape(file_name) if file_name is not None else r".+"
    pattern = rf"{prefix}_{_UUID_PATTERN}\.{re.escape(extension)}"
    return re.fullmatch(pattern, name) is not None


def is_safe_name(name: str) -> bool:
    """저장소 루트 밖을 가리키지 않는 단일 파일명인지."""
    if not name or name in (".", ".."):
        return False
    return not (set(name) & FORBIDDEN_CHARS)
