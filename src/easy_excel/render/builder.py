"""
문서 빌더: LayoutConfig + 레코드 → SheetDocument.

순서:
1. 헤더 행 그리기 (헤더 스타일, 병합 영역 등록)
2. 데이터 행 1개에 모든 레코드 × 필드 셀을 이어서 추가
3. 병합 후 영역 테두리 다시 적용
4. 틀 고정 (freezePaneIndex 또는 헤더 행 수)

2번은 기존 출력 형식을 유지하기 위해 레코드마다 행을 나누지 않는다.
"""

import logging
from collections.abc import Sequence
from typing import Any

from easy_excel.core.resolver import FieldResolver
from easy_excel.domain.errors import ConfigValidationError, DocumentGenerationError
from easy_excel.domain.schemas import LayoutConfig
from easy_excel.render.excel import SheetDocument
from easy_excel.render.style import register_header_style

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    LayoutConfig 기반 엑셀 문서 생성기.

    상태를 갖지 않으므로 여러 요청에서 같이 써도 된다.
    """

    def __init__(self, resolver: FieldResolver | None = None):
        self.resolver = resolver or FieldResolver()

    def build(self, config: LayoutConfig, records: Sequence[Any] | None) -> SheetDocument:
        """
        문서 생성.

        Args:
            config: 검증된 레이아웃 설정
            records: Mapping 또는 객체 목록

        Returns:
            완성된 SheetDocument

        Raises:
            ConfigValidationError: 잘못된 병합/고정 좌표
            DocumentGenerationError: 필드 해석 등 생성 중 실패 (원인 보존)
        """
        try:
            document = SheetDocument()
            self._write_headers(document, config)
            self._write_records(document, config, records)
            document.apply_merges()
            document.create_freeze_pane(config.freeze_pane())

            logger.debug(
                f"Built '{config.file_name}': {document.physical_row_count} rows, "
                f"{len(document.merged_ranges)} merged regions"
            )
            return document

        except ConfigValidationError:
            raise
        except Exception as e:
            logger.error(f"Document generation failed for '{config.file_name}': {e}", exc_info=True)
            raise DocumentGenerationError(
                file_name=config.file_name,
                error=str(e),
            ) from e

    def _write_headers(self, document: SheetDocument, config: LayoutConfig) -> None:
        """헤더 행 그리기."""
        style = register_header_style(document.workbook)

        for headers in config.headers:
            row = document.append_row()
            for header in headers:
                cell_range = header.merge_range()
                if cell_range is not None:
                    document.add_merged_region(cell_range)
                document.append_cell(row, header.name, style=style)

    def _write_records(
        self,
        document: SheetDocument,
        config: LayoutConfig,
        records: Sequence[Any] | None,
    ) -> None:
        """모든 레코드를 데이터 행 하나에 이어 쓰기."""
        if not records:
            return

        row = document.append_row()
        for record in records:
            for path in config.fields:
                text = self.resolver.resolve(record, path, config.formats.get(path))
                document.append_cell(row, text)
