"""
Render layer: XLSX 문서 생성.

역할:
- LayoutConfig + 레코드 → SheetDocument (openpyxl)
"""

from .builder import DocumentBuilder
from .excel import SheetDocument

__all__ = [
    "DocumentBuilder",
    "SheetDocument",
]
