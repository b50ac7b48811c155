"""
Domain Constants: 내보내기 엔진 전역 상수.

좌표 구분자, 기본 날짜 패턴, 파일명 정책 등.
"""

# =============================================================================
# Separators
# =============================================================================

EMPTY = ""
COMMA = ","
POINT = "."

# =============================================================================
# Date Patterns (기본 날짜 패턴)
# =============================================================================
# 레이아웃/레코드에 패턴이 없을 때 타입별 기본값.
# 패턴 문자는 레이아웃 YAML과 동일한 형식 (yyyy, MM, dd, HH, mm, ss).

YYYY_MM_DD_HH_MM_SS = "yyyy-MM-dd HH:mm:ss"
YYYY_MM_DD = "yyyy-MM-dd"
HH_MM_SS = "HH:mm:ss"

# 레코드 필드/프로퍼티에 붙는 포맷 메타데이터 키
FORMAT_METADATA_KEY = "format"

# =============================================================================
# Artifact Storage (임시 파일 정책)
# =============================================================================
# 파일명 패턴: {file_name}_{uuid4}.{extension}
# 예: users_3f2b0c8e-....xlsx

XLSX = "xlsx"
TEMP_EXCEL_DIR = "temp"

# =============================================================================
# Header Style
# =============================================================================

HEADER_FILL_COLOR = "87CEEB"  # sky blue
BORDER_STYLE = "thin"

# =============================================================================
# MIME Types
# =============================================================================

APPLICATION_OCTET_STREAM = "application/octet-stream"
