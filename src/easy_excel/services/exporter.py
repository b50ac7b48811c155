"""
Export 오케스트레이터: 검증 → 문서 생성 → 저장 또는 스트림.

두 가지 출력:
- generate_and_store(): 임시 artifact로 저장, 이름 반환 (나중에 download)
- generate_and_stream(): 메모리 버퍼로 직렬화, 호출자가 전송

레이아웃 지정 방법 (호출자가 명시적으로 넘김):
- LayoutConfig 인스턴스
- dict (YAML을 이미 읽은 경우)
- YAML 경로
- @export("layouts/users.yaml")로 표시한 함수
"""

import inspect
import io
import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar, Union

from easy_excel.core.storage import ArtifactStore
from easy_excel.domain.errors import DocumentGenerationError, ErrorCodes, ExportError
from easy_excel.domain.schemas import LayoutConfig, load_layout_config
from easy_excel.render.builder import DocumentBuilder
from easy_excel.render.excel import SheetDocument

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

EXPORT_CONFIG_ATTR = "__export_config__"

LayoutSource = Union[LayoutConfig, Mapping[str, Any], Path, str, Callable[..., Any]]


# =============================================================================
# Layout Lookup
# =============================================================================


def export(config_path: str | Path) -> Callable[[F], F]:
    """
    함수가 내보내는 레이아웃 YAML 지정.

    상대 경로는 함수가 정의된 모듈 위치 기준.

    Usage:
        @export("layouts/users.yaml")
        def export_users(...): ...

        exporter.generate_and_store(records, export_users)
    """
    def decorator(func: F) -> F:
        path = Path(config_path)
        if not path.is_absolute():
            path = Path(inspect.getfile(func)).parent / path
        setattr(func, EXPORT_CONFIG_ATTR, path)
        return func

    return decorator


def config_for(func: Callable[..., Any]) -> LayoutConfig:
    """
    @export로 표시한 함수의 레이아웃 로드.

    Raises:
        ExportError: CONFIG_NOT_FOUND (표시 없음 또는 파일 없음)
    """
    path = getattr(func, EXPORT_CONFIG_ATTR, None)
    if path is None:
        raise ExportError(
            ErrorCodes.CONFIG_NOT_FOUND,
            function=getattr(func, "__qualname__", repr(func)),
            error="function is not marked with @export",
        )
    return load_layout_config(path)


def resolve_layout(source: LayoutSource) -> LayoutConfig:
    """여러 형태의 레이아웃 지정을 LayoutConfig로 변환."""
    if isinstance(source, LayoutConfig):
        return source
    if isinstance(source, Mapping):
        return LayoutConfig.from_dict(dict(source))
    if isinstance(source, (str, Path)):
        return load_layout_config(Path(source))
    if callable(source):
        return config_for(source)
    raise ExportError(ErrorCodes.CONFIG_NOT_FOUND, error=f"unsupported layout source: {type(source).__name__}")


# =============================================================================
# Exporter
# =============================================================================


class ExcelExporter:
    """
    엑셀 내보내기 진입점.

    Usage:
        exporter = ExcelExporter(ArtifactStore(Path("temp"), deletion_queue))
        name = exporter.generate_and_store(users, "layouts/users.yaml")
        data = exporter.download(name)
    """

    def __init__(
        self,
        store: ArtifactStore | None = None,
        builder: DocumentBuilder | None = None,
    ):
        self.store = store or ArtifactStore()
        self.builder = builder or DocumentBuilder()

    def build(self, records: Sequence[Any] | None, layout: LayoutSource) -> tuple[LayoutConfig, SheetDocument]:
        """
        레이아웃 검증 후 문서 생성.

        Raises:
            ConfigValidationError: 설정 필수 항목 누락
            DocumentGenerationError: 생성 실패
        """
        config = resolve_layout(layout)
        config.validate()
        return config, self.builder.build(config, records)

    def generate_and_store(self, records: Sequence[Any] | None, layout: LayoutSource) -> str:
        """
        문서 생성 후 임시 파일로 저장.

        Returns:
            artifact 이름 ({file_name}_{uuid}.xlsx)

        Raises:
            ArtifactIOError: 파일 쓰기 실패
        """
        config, document = self.build(records, layout)
        try:
            return self.store.save(document, config.file_name)
        except ExportError:
            raise
        except Exception as e:
            raise DocumentGenerationError(file_name=config.file_name, error=str(e)) from e

    def generate_and_stream(self, records: Sequence[Any] | None, layout: LayoutSource) -> io.BytesIO:
        """
        문서 생성 후 메모리 버퍼로 직렬화.

        Returns:
            읽기 위치가 0인 BytesIO
        """
        config, document = self.build(records, layout)
        try:
            return document.to_buffer()
        except Exception as e:
            logger.error(f"Serialization failed for '{config.file_name}': {e}", exc_info=True)
            raise DocumentGenerationError(file_name=config.file_name, error=str(e)) from e

    def download(self, name: str) -> bytes:
        """
        저장된 artifact 내용 반환 후 삭제 예약.

        Raises:
            ArtifactNotFoundError: 없는 artifact
        """
        return self.store.retrieve(name)
