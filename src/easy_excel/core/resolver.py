"""
필드 해석기: dotted path → 셀 텍스트.

규칙:
- record가 None 이거나 path가 비어 있으면 빈 문자열 (실패하지 않음)
- Mapping record: path 전체를 하나의 키로 조회 (점으로 나누지 않음)
- 객체 record: 첫 번째 점 기준으로 head/rest 분리 후 재귀
  - 중간 값이 None → 빈 문자열 (rest는 해석하지 않음)
- 존재하지 않는 멤버 → FieldNotFoundError (None 값과 구분)

날짜 패턴 우선순위:
    dataclass field metadata > property 접근자(@date_format) > 레이아웃 formats > 타입 기본값
"""

import dataclasses
import inspect
from collections.abc import Iterator, Mapping
from typing import Any

from easy_excel.core.formatting import DATE_FORMAT_ATTR, format_value
from easy_excel.domain.constants import EMPTY, FORMAT_METADATA_KEY, POINT
from easy_excel.domain.errors import FieldNotFoundError

_MISSING = object()


# =============================================================================
# Structural Field Access
# =============================================================================


class FieldAccessor:
    """
    레코드 멤버 접근.

    공개 속성이 없으면 관례상 private(`_name`) 속성과
    name-mangling(`_Class__name`) 속성까지 찾는다.
    """

    def member_names(self, record: Any, name: str) -> Iterator[str]:
        """멤버 이름 후보 (조회 순서)."""
        yield name
        yield f"_{name}"
        for cls in type(record).__mro__:
            yield f"_{cls.__name__.lstrip('_')}__{name}"

    def get(self, record: Any, name: str) -> Any:
        """
        멤버 값 조회.

        Raises:
            FieldNotFoundError: 후보 이름 어디에도 멤버가 없음
        """
        for attr in self.member_names(record, name):
            value = getattr(record, attr, _MISSING)
            if value is not _MISSING:
                return value

        raise FieldNotFoundError(field=name, record_type=type(record).__name__)

    def format_of(self, record: Any, name: str) -> str | None:
        """
        멤버에 지정된 날짜 패턴.

        1. dataclass field(metadata={"format": ...})
        2. property getter/setter 의 @date_format
        """
        names = list(self.member_names(record, name))

        if dataclasses.is_dataclass(record):
            for f in dataclasses.fields(record):
                if f.name in names and FORMAT_METADATA_KEY in f.metadata:
                    return f.metadata[FORMAT_METADATA_KEY]

        for attr in names:
            descriptor = inspect.getattr_static(type(record), attr, None)
            if isinstance(descriptor, property):
                for accessor in (descriptor.fget, descriptor.fset):
                    pattern = getattr(accessor, DATE_FORMAT_ATTR, None)
                    if pattern:
                        return pattern
        return None


# =============================================================================
# Resolver
# =============================================================================


class FieldResolver:
    """
    dotted path 해석기.

    Usage:
        resolver = FieldResolver()
        resolver.resolve(order, "customer.address.city")
    """

    def __init__(self, accessor: FieldAccessor | None = None):
        self.accessor = accessor or FieldAccessor()

    def resolve(self, record: Any, path: str, column_format: str | None = None) -> str:
        """
        record에서 path 값을 찾아 셀 텍스트로 변환.

        Args:
            record: Mapping 또는 임의 객체
            path: dotted path (예: "user.role.name")
            column_format: 레이아웃 formats 에 지정된 열 단위 패턴

        Returns:
            셀 텍스트

        Raises:
            FieldNotFoundError: 존재하지 않는 멤버
        """
        if record is None or not path:
            return EMPTY

        # Mapping 키는 점을 포함해도 나누지 않음
        if isinstance(record, Mapping):
            value = record.get(path, _MISSING)
            if value is _MISSING:
                return EMPTY
            return format_value(value, column_format)

        head, sep, rest = path.partition(POINT)
        if not sep:
            return self._format_member(record, head, column_format)

        nested = self.accessor.get(record, head)
        # 중간 값이 None 이면 더 내려가지 않음
        if nested is None:
            return EMPTY
        return self.resolve(nested, rest, column_format)

    def _format_member(self, record: Any, name: str, column_format: str | None) -> str:
        value = self.accessor.get(record, name)
        pattern = self.accessor.format_of(record, name) or column_format
        return format_value(value, pattern)


_default_resolver = FieldResolver()


def resolve(record: Any, path: str) -> str:
    """기본 FieldResolver로 해석 (간편 함수)."""
    return _default_resolver.resolve(record, path)
