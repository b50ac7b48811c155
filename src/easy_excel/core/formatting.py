"""
값 포맷터: 셀 텍스트 변환.

규칙:
- None → 빈 문자열
- 날짜/시간 → 패턴 적용 (없으면 타입별 기본 패턴)
  - datetime: yyyy-MM-dd HH:mm:ss
  - date:     yyyy-MM-dd
  - time:     HH:mm:ss
- 그 외 → str(value)
- 절대 실패하지 않음: 해석 불가 패턴은 기본 패턴으로 대체

패턴 문자 (레이아웃 YAML과 동일):
    yyyy yy MMMM MMM MM M dd d HH H hh h mm m ss s SSS a EEEE EEE 'literal'
'%' 가 포함된 패턴은 strftime 포맷으로 그대로 사용.
"""

import logging
import re
from collections.abc import Callable
from datetime import date, datetime, time
from functools import lru_cache
from typing import Any, TypeVar

from easy_excel.domain.constants import EMPTY, HH_MM_SS, YYYY_MM_DD, YYYY_MM_DD_HH_MM_SS

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# 프로퍼티 getter/setter에 붙는 포맷 속성명
DATE_FORMAT_ATTR = "__date_format__"

_TOKEN_RE = re.compile(r"''|'(?:[^']|'')*'|([A-Za-z])\1*|[^A-Za-z']+|'")

_Renderer = Callable[[Any], str]


# =============================================================================
# Accessor Metadata
# =============================================================================


def date_format(pattern: str) -> Callable[[F], F]:
    """
    프로퍼티 접근자에 날짜 패턴 지정.

    Usage:
        class User:
            @property
            @date_format("yyyy/MM/dd")
            def joined(self) -> date:
                return self._joined
    """
    def decorator(func: F) -> F:
        setattr(func, DATE_FORMAT_ATTR, pattern)
        return func

    return decorator


# =============================================================================
# Pattern Compilation
# =============================================================================


def _fraction(width: int) -> _Renderer:
    return lambda v: f"{v.microsecond:06d}"[:width].ljust(width, "0")


def _token_renderer(token: str) -> _Renderer:
    """패턴 토큰 하나 → 렌더 함수. 모르는 문자는 ValueError."""
    if token.startswith("'"):
        # 따옴표 안의 '' 는 작은따옴표 하나
        literal = token[1:-1].replace("''", "'") or "'"
        return lambda v: literal
    if not token[0].isalpha():
        return lambda v: token

    letter, width = token[0], len(token)
    if letter == "y":
        if width == 2:
            return lambda v: f"{v.year % 100:02d}"
        return lambda v: f"{v.year:0{max(width, 4)}d}"
    if letter == "M":
        if width >= 4:
            return lambda v: v.strftime("%B")
        if width == 3:
            return lambda v: v.strftime("%b")
        return lambda v: f"{v.month:0{width}d}"
    if letter == "d":
        return lambda v: f"{v.day:0{width}d}"
    if letter == "H":
        return lambda v: f"{v.hour:0{width}d}"
    if letter == "h":
        return lambda v: f"{(v.hour % 12) or 12:0{width}d}"
    if letter == "m":
        return lambda v: f"{v.minute:0{width}d}"
    if letter == "s":
        return lambda v: f"{v.second:0{width}d}"
    if letter == "S":
        return _fraction(width)
    if letter == "a":
        return lambda v: "AM" if v.hour < 12 else "PM"
    if letter == "E":
        if width >= 4:
            return lambda v: v.strftime("%A")
        return lambda v: v.strftime("%a")

    raise ValueError(f"Unknown pattern letter: {letter!r}")


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> tuple[_Renderer, ...]:
    """
    날짜 패턴 컴파일.

    Raises:
        ValueError: 해석할 수 없는 패턴 문자
    """
    return tuple(_token_renderer(m.group(0)) for m in _TOKEN_RE.finditer(pattern))


# =============================================================================
# Formatting
# =============================================================================


def is_temporal(value: Any) -> bool:
    """날짜/시간 값인지."""
    return isinstance(value, (date, time))


def default_pattern(value: Any) -> str | None:
    """타입별 기본 패턴 (datetime은 date의 하위 타입이므로 먼저 확인)."""
    if isinstance(value, datetime):
        return YYYY_MM_DD_HH_MM_SS
    if isinstance(value, date):
        return YYYY_MM_DD
    if isinstance(value, time):
        return HH_MM_SS
    return None


def _render(value: date | time, pattern: str) -> str:
    if "%" in pattern:
        return value.strftime(pattern)
    return "".join(render(value) for render in compile_pattern(pattern))


def format_value(value: Any, pattern: Any = None) -> str:
    """
    값을 셀 텍스트로 변환.

    Args:
        value: 해석된 필드 값
        pattern: 우선 적용할 날짜 패턴 (None이면 타입 기본값)

    Returns:
        셀 텍스트 (실패하지 않음)
    """
    if value is None:
        return EMPTY
    if not is_temporal(value):
        return str(value)

    fallback = default_pattern(value)
    if pattern and isinstance(pattern, str):
        try:
            return _render(value, pattern)
        except (ValueError, AttributeError, TypeError) as e:
            logger.debug(f"Date pattern {pattern!r} not applicable to {value!r}: {e}")

    return _render(value, fallback)
