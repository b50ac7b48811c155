"""
FastAPI Routes.

API 라우트 (엑셀 내보내기/다운로드)
"""

from . import exports

__all__ = ["exports"]
