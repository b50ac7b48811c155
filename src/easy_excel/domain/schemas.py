"""
Layout schemas for the export engine.

레이아웃 YAML 구조:
    fileName: users
    headers:
      - - {name: 이름, mergeIndex: "0,1,0,0"}
        - {name: 연락처, mergeIndex: "0,0,1,2"}
      - - {name: ""}
        - {name: 전화}
        - {name: 이메일}
    fields: [name, contact.phone, contact.email]
    freezePaneIndex: "0,2,0,2"   # 선택
    formats: {created_at: "yyyy/MM/dd"}   # 선택

좌표 규칙:
- mergeIndex: firstRow,lastRow,firstCol,lastCol (0부터, 양끝 포함)
- freezePaneIndex: colSplit,rowSplit,leftmostColumn,topRow
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from easy_excel.domain.constants import COMMA
from easy_excel.domain.errors import ConfigValidationError, ErrorCodes, ExportError

# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True)
class CellRange:
    """병합 영역 (0부터, 양끝 포함)."""
    first_row: int
    last_row: int
    first_col: int
    last_col: int

    def overlaps(self, other: "CellRange") -> bool:
        return not (
            self.last_row < other.first_row
            or other.last_row < self.first_row
            or self.last_col < other.first_col
            or other.last_col < self.first_col
        )

    def cells(self) -> list[tuple[int, int]]:
        """영역 안의 모든 (row, col) 좌표."""
        return [
            (row, col)
            for row in range(self.first_row, self.last_row + 1)
            for col in range(self.first_col, self.last_col + 1)
        ]


@dataclass(frozen=True)
class FreezePane:
    """
    틀 고정 설정.

    col_split/row_split: 고정할 열/행 개수
    left_most_column/top_row: 스크롤 영역에서 처음 보일 열/행
    """
    col_split: int
    row_split: int
    left_most_column: int = 0
    top_row: int = 0


def parse_indexes(value: Any, name: str) -> tuple[int, int, int, int]:
    """
    "a,b,c,d" 형식 좌표 파싱.

    Args:
        value: 쉼표 구분 문자열 또는 정수 4개 시퀀스
        name: 에러 메시지용 설정 키

    Returns:
        정수 4개 튜플

    Raises:
        ConfigValidationError: 정수 4개가 아니거나 음수 포함
    """
    parts = value.split(COMMA) if isinstance(value, str) else list(value)
    try:
        numbers = tuple(int(str(p).strip()) for p in parts)
    except ValueError as e:
        raise ConfigValidationError(
            error=f"{name} must contain integers only",
            value=value,
        ) from e

    if len(numbers) != 4 or any(n < 0 for n in numbers):
        raise ConfigValidationError(
            error=f"{name} must be four non-negative integers",
            value=value,
        )
    return numbers  # type: ignore[return-value]


# =============================================================================
# Layout
# =============================================================================


def _index_text(value: Any, name: str) -> str | None:
    """mergeIndex/freezePaneIndex 원본 값 → "a,b,c,d" 문자열 (없으면 None)."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return COMMA.join(str(v) for v in value)
    raise ConfigValidationError(
        error=f"{name} must be a string or a list",
        value=value,
    )


def _sequence(value: Any, name: str) -> list[Any]:
    """YAML 목록 값 확인 (없으면 빈 목록)."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ConfigValidationError(
            error=f"{name} must be a list",
            value=value,
        )
    return list(value)


@dataclass(frozen=True)
class HeaderCell:
    """헤더 셀 하나."""
    name: str
    merge_index: str | None = None

    def merge_range(self) -> CellRange | None:
        if self.merge_index is None:
            return None
        first_row, last_row, first_col, last_col = parse_indexes(self.merge_index, "mergeIndex")
        if first_row > last_row or first_col > last_col:
            raise ConfigValidationError(
                error="mergeIndex first coordinate must not exceed last",
                header=self.name,
                value=self.merge_index,
            )
        return CellRange(first_row, last_row, first_col, last_col)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> "HeaderCell":
        # "- 이름" 처럼 문자열만 쓴 헤더도 허용
        if isinstance(data, str):
            return cls(name=data)
        if not isinstance(data, dict):
            raise ConfigValidationError(
                error="header cell must be a string or a mapping",
                value=data,
            )
        merge = _index_text(data.get("mergeIndex", data.get("merge_index")), "mergeIndex")
        name = data.get("name")
        return cls(name="" if name is None else str(name), merge_index=merge)


@dataclass(frozen=True)
class LayoutConfig:
    """
    엑셀 레이아웃 설정.

    내보내기 1회마다 생성 → validate() → 문서 생성 후 폐기.
    생성 후 변경 불가 (목록은 tuple, formats는 읽기 전용 매핑으로 보관).
    """
    file_name: str
    headers: tuple[tuple[HeaderCell, ...], ...] = ()
    fields: tuple[str, ...] = ()
    freeze_pane_index: str | None = None
    # 열 단위 날짜 패턴 (레코드 메타데이터보다 우선순위 낮음)
    formats: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(tuple(row) for row in self.headers))
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "formats", MappingProxyType(dict(self.formats)))

    def validate(self) -> None:
        """
        설정 검증.

        Raises:
            ConfigValidationError: file_name/fields 누락, 잘못된 좌표, 병합 영역 겹침
        """
        if not self.file_name:
            raise ConfigValidationError(error="fileName is required")
        if not self.fields:
            raise ConfigValidationError(error="fields must not be empty", file_name=self.file_name)

        ranges = self.merge_ranges()
        for i, current in enumerate(ranges):
            for other in ranges[i + 1:]:
                if current.overlaps(other):
                    raise ConfigValidationError(
                        error="merge regions overlap",
                        file_name=self.file_name,
                        regions=[current, other],
                    )

        if self.has_explicit_freeze_pane():
            parse_indexes(self.freeze_pane_index, "freezePaneIndex")

    def merge_ranges(self) -> list[CellRange]:
        """헤더에 선언된 병합 영역 (선언 순서)."""
        ranges = []
        for row in self.headers:
            for header in row:
                cell_range = header.merge_range()
                if cell_range is not None:
                    ranges.append(cell_range)
        return ranges

    def has_explicit_freeze_pane(self) -> bool:
        return bool(self.freeze_pane_index) and COMMA in self.freeze_pane_index

    def freeze_pane(self) -> FreezePane:
        """
        틀 고정 위치.

        freezePaneIndex가 없거나 쉼표가 없으면 헤더 행 수만큼 고정 (열 고정 없음).
        """
        if self.has_explicit_freeze_pane():
            return FreezePane(*parse_indexes(self.freeze_pane_index, "freezePaneIndex"))
        header_rows = len(self.headers)
        return FreezePane(col_split=0, row_split=header_rows, left_most_column=0, top_row=header_rows)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutConfig":
        """
        YAML 원본 키(camelCase)와 snake_case 모두 허용.

        Raises:
            ConfigValidationError: 항목 타입이 맞지 않음 (예: fields가 목록이 아님)
        """
        if not isinstance(data, dict):
            raise ConfigValidationError(error="layout must be a mapping", type=type(data).__name__)

        headers = [
            [HeaderCell.from_dict(cell) for cell in _sequence(row, "headers row")]
            for row in _sequence(data.get("headers"), "headers")
        ]

        fields = _sequence(data.get("fields"), "fields")
        for path in fields:
            if isinstance(path, (dict, list, tuple)):
                raise ConfigValidationError(error="field path must be a string", value=path)

        formats = data.get("formats") or {}
        if not isinstance(formats, dict):
            raise ConfigValidationError(error="formats must be a mapping", value=formats)

        file_name = data.get("fileName", data.get("file_name"))
        freeze = _index_text(
            data.get("freezePaneIndex", data.get("freeze_pane_index")),
            "freezePaneIndex",
        )

        return cls(
            file_name="" if file_name is None else str(file_name),
            headers=headers,
            fields=[str(f) for f in fields],
            freeze_pane_index=freeze,
            formats={str(k): str(v) for k, v in formats.items()},
        )


def load_layout_config(config_path: Path) -> LayoutConfig:
    """
    레이아웃 YAML 로드.

    Args:
        config_path: 레이아웃 YAML 경로

    Returns:
        LayoutConfig (검증 전)

    Raises:
        ExportError: CONFIG_NOT_FOUND
        ConfigValidationError: YAML 파싱 실패
    """
    if not config_path.exists():
        raise ExportError(ErrorCodes.CONFIG_NOT_FOUND, path=str(config_path))

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(error=f"invalid YAML: {e}", path=str(config_path)) from e

    return LayoutConfig.from_dict(data or {})
