"""
Application Services.

역할:
- exporter: 검증 → 생성 → 저장/스트림
"""

from .exporter import ExcelExporter, config_for, export, resolve_layout

__all__ = [
    "ExcelExporter",
    "export",
    "config_for",
    "resolve_layout",
]
