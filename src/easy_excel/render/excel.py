"""
Excel (XLSX) 문서: openpyxl 기반 단일 시트 그리드.

규칙:
- 행은 뒤에 추가만 가능 (중간 삽입 없음)
- 행/셀 위치 = 지금까지 실제로 만든 행/셀 개수 (physical count)
- 병합 영역은 등록만 해 두고 apply_merges()에서 한 번에 병합
  (병합 후에는 기준 셀만 값/스타일 유지)
- 셀 값은 항상 문자열로 저장 ('=' 로 시작해도 수식 아님)
- XML에 쓸 수 없는 제어 문자는 _xHHHH_ 로 이스케이프
"""

import io
from typing import Any, BinaryIO

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.utils import get_column_letter
from openpyxl.workbook import Workbook

from easy_excel.domain.constants import EMPTY
from easy_excel.domain.schemas import CellRange, FreezePane
from easy_excel.render.style import set_region_border


def escape_illegal_characters(text: str) -> str:
    """
    XML에 쓸 수 없는 제어 문자 이스케이프.

    예: "a\\x0bb" → "a_x000B_b" (엑셀이 읽을 때 원래 문자로 복원)
    """
    return ILLEGAL_CHARACTERS_RE.sub(lambda m: f"_x{ord(m.group(0)):04X}_", text)


class SheetDocument:
    """
    엑셀 문서 (시트 1개).

    Usage:
        doc = SheetDocument()
        row = doc.append_row()
        doc.append_cell(row, "이름", style="easy_excel_header")
        buffer = doc.to_buffer()
    """

    def __init__(self) -> None:
        self.workbook = Workbook()
        self.worksheet = self.workbook.active
        self.merged_ranges: list[CellRange] = []
        self.freeze_pane: FreezePane | None = None
        self._cell_counts: list[int] = []

    # =========================================================================
    # Grid
    # =========================================================================

    @property
    def physical_row_count(self) -> int:
        """지금까지 만든 행 수."""
        return len(self._cell_counts)

    def physical_cell_count(self, row: int) -> int:
        """행에 만든 셀 수."""
        return self._cell_counts[row]

    def append_row(self) -> int:
        """새 행 추가. 0부터 시작하는 행 번호 반환."""
        self._cell_counts.append(0)
        return len(self._cell_counts) - 1

    def append_cell(self, row: int, value: str, style: str | None = None) -> Cell:
        """
        행 끝에 셀 추가.

        Args:
            row: append_row()가 반환한 행 번호
            value: 셀 텍스트
            style: 워크북에 등록된 NamedStyle 이름

        Returns:
            생성된 openpyxl Cell
        """
        col = self._cell_counts[row]
        self._cell_counts[row] += 1

        cell = self.worksheet.cell(row=row + 1, column=col + 1)
        cell.value = escape_illegal_characters(value)
        # 텍스트 그대로 저장 (수식 해석 방지)
        cell.data_type = "s"
        if style is not None:
            cell.style = style
        return cell

    # =========================================================================
    # Merge / Freeze
    # =========================================================================

    def add_merged_region(self, cell_range: CellRange) -> None:
        """병합 영역 등록 (병합은 apply_merges에서)."""
        self.merged_ranges.append(cell_range)

    def apply_merges(self) -> None:
        """등록된 영역 병합 후 영역 테두리 다시 적용."""
        for cell_range in self.merged_ranges:
            self.worksheet.merge_cells(
                start_row=cell_range.first_row + 1,
                start_column=cell_range.first_col + 1,
                end_row=cell_range.last_row + 1,
                end_column=cell_range.last_col + 1,
            )
        for cell_range in self.merged_ranges:
            set_region_border(self.worksheet, cell_range)

    def create_freeze_pane(self, pane: FreezePane) -> None:
        """
        틀 고정.

        col_split/row_split 이 모두 0이면 고정 해제.
        """
        self.freeze_pane = pane
        if pane.col_split == 0 and pane.row_split == 0:
            self.worksheet.freeze_panes = None
            return

        split_cell = f"{get_column_letter(pane.col_split + 1)}{pane.row_split + 1}"
        self.worksheet.freeze_panes = split_cell
        # 스크롤 영역의 첫 셀은 분할 위치와 다를 수 있음
        self.worksheet.sheet_view.pane.topLeftCell = (
            f"{get_column_letter(pane.left_most_column + 1)}{pane.top_row + 1}"
        )

    # =========================================================================
    # Inspection
    # =========================================================================

    def rows(self) -> list[list[str]]:
        """행별 셀 텍스트 (병합으로 지워진 셀은 빈 문자열)."""
        values = []
        for row, count in enumerate(self._cell_counts):
            values.append([
                self._text(self.worksheet.cell(row=row + 1, column=col + 1).value)
                for col in range(count)
            ])
        return values

    @staticmethod
    def _text(value: Any) -> str:
        return EMPTY if value is None else str(value)

    # =========================================================================
    # Output
    # =========================================================================

    def write(self, stream: BinaryIO) -> None:
        """바이너리 스트림에 XLSX 쓰기."""
        self.workbook.save(stream)

    def to_buffer(self) -> io.BytesIO:
        """메모리 버퍼에 직렬화 (읽기 위치 0으로 되돌림)."""
        buffer = io.BytesIO()
        self.write(buffer)
        buffer.seek(0)
        return buffer
