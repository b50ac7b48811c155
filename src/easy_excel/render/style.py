"""
엑셀 스타일: 헤더 기본 스타일 + 병합 영역 테두리.

병합하면 기준 셀(좌상단) 외의 셀 스타일이 사라지므로
병합 후 영역 테두리를 다시 그려야 한다.
"""

from openpyxl.styles import Alignment, Border, Font, NamedStyle, PatternFill, Side
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from easy_excel.domain.constants import BORDER_STYLE, HEADER_FILL_COLOR
from easy_excel.domain.schemas import CellRange

HEADER_STYLE_NAME = "easy_excel_header"

thin_side = Side(border_style=BORDER_STYLE, color="000000")
full_thin_border = Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def header_style() -> NamedStyle:
    """헤더 스타일: 테두리, 가운데 정렬(가로/세로), 굵게, 자동 줄바꿈, 배경색."""
    style = NamedStyle(name=HEADER_STYLE_NAME)
    style.border = full_thin_border
    style.fill = PatternFill(
        fill_type="solid",
        start_color=HEADER_FILL_COLOR,
        end_color=HEADER_FILL_COLOR,
    )
    style.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
    style.font = Font(bold=True)
    return style


def register_header_style(wb: Workbook) -> str:
    """워크북에 헤더 스타일 등록 (이미 있으면 그대로). 스타일 이름 반환."""
    if HEADER_STYLE_NAME not in wb.named_styles:
        wb.add_named_style(header_style())
    return HEADER_STYLE_NAME


def set_region_border(ws: Worksheet, cell_range: CellRange, side: Side = thin_side) -> None:
    """
    병합 영역 네 변에 테두리 적용.

    각 변의 셀은 해당 방향 테두리만 바꾸고 나머지 방향은 유지한다.
    """
    for row, col in cell_range.cells():
        on_top = row == cell_range.first_row
        on_bottom = row == cell_range.last_row
        on_left = col == cell_range.first_col
        on_right = col == cell_range.last_col
        if not (on_top or on_bottom or on_left or on_right):
            continue

        cell = ws.cell(row=row + 1, column=col + 1)
        current = cell.border
        cell.border = Border(
            left=side if on_left else current.left,
            right=side if on_right else current.right,
            top=side if on_top else current.top,
            bottom=side if on_bottom else current.bottom,
        )
