"""
Exports Routes: 엑셀 생성/다운로드.

- POST /api/exports/{layout} → 생성 후 바로 응답 본문으로 전송
- POST /api/exports/{layout}/artifacts → 임시 파일로 저장, 이름 반환
- GET /api/exports/artifacts/{name} → 저장된 파일 1회 다운로드 (이후 삭제)

레이아웃: exports_root/{layout}.yaml
"""

import re
from pathlib import Path
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response, StreamingResponse

from easy_excel.domain.constants import APPLICATION_OCTET_STREAM, XLSX
from easy_excel.domain.errors import (
    ArtifactNotFoundError,
    ConfigValidationError,
    DocumentGenerationError,
    ErrorCodes,
    ExportError,
    FieldNotFoundError,
)
from easy_excel.domain.schemas import LayoutConfig, load_layout_config
from easy_excel.services.exporter import ExcelExporter

# Routers
api_router = APIRouter()  # API endpoints

# 레이아웃 이름 규칙 (경로 구분자 금지)
LAYOUT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


# =============================================================================
# Helpers
# =============================================================================


def content_disposition(file_name: str, extension: str = XLSX) -> str:
    """
    첨부 파일 헤더.

    ASCII filename + RFC 5987 filename* (비ASCII 파일명)
    """
    ascii_name = file_name.encode("ascii", "ignore").decode().replace('"', "") or "export"
    return (
        f'attachment; filename="{ascii_name}.{extension}"; '
        f"filename*=UTF-8''{quote(file_name)}.{extension}"
    )


def _load_layout(request: Request, layout: str) -> LayoutConfig:
    if not LAYOUT_NAME_PATTERN.match(layout):
        raise HTTPException(status_code=400, detail=f"Invalid layout name: {layout}")

    exports_root: Path = request.app.state.exports_root
    return load_layout_config(exports_root / f"{layout}.yaml")


def _to_http_error(e: ExportError) -> HTTPException:
    """ExportError → HTTP 상태 코드."""
    detail = jsonable_encoder(e.to_dict())
    if isinstance(e, ArtifactNotFoundError) or e.code == ErrorCodes.CONFIG_NOT_FOUND:
        return HTTPException(status_code=404, detail=detail)
    if isinstance(e, ConfigValidationError):
        return HTTPException(status_code=400, detail=detail)
    if isinstance(e, DocumentGenerationError) and isinstance(e.__cause__, FieldNotFoundError):
        return HTTPException(
            status_code=422,
            detail={**detail, "cause": jsonable_encoder(e.__cause__.to_dict())},
        )
    return HTTPException(status_code=500, detail=detail)


# =============================================================================
# API Routes
# =============================================================================


@api_router.post("/{layout}")
def export_stream(
    request: Request,
    layout: str,
    records: list[dict[str, Any]] = Body(default=[], embed=True),
) -> StreamingResponse:
    """
    엑셀 생성 후 바로 전송.

    Args:
        layout: 레이아웃 이름 (exports/{layout}.yaml)
        records: 레코드 목록 (JSON 객체 배열)
    """
    exporter: ExcelExporter = request.app.state.exporter
    try:
        config = _load_layout(request, layout)
        buffer = exporter.generate_and_stream(records, config)
    except ExportError as e:
        raise _to_http_error(e) from e

    return StreamingResponse(
        buffer,
        media_type=APPLICATION_OCTET_STREAM,
        headers={"Content-Disposition": content_disposition(config.file_name)},
    )


@api_router.post("/{layout}/artifacts")
def export_store(
    request: Request,
    layout: str,
    records: list[dict[str, Any]] = Body(default=[], embed=True),
) -> dict[str, Any]:
    """
    엑셀 생성 후 임시 파일로 저장.

    Returns:
        artifact 이름과 다운로드 URL
    """
    exporter: ExcelExporter = request.app.state.exporter
    try:
        config = _load_layout(request, layout)
        name = exporter.generate_and_store(records, config)
    except ExportError as e:
        raise _to_http_error(e) from e

    return {
        "name": name,
        "download_url": f"/api/exports/artifacts/{name}",
    }


@api_router.get("/artifacts/{name}")
def download_artifact(request: Request, name: str) -> Response:
    """
    저장된 엑셀 1회 다운로드.

    전송 후 파일은 삭제 큐에서 삭제된다.
    """
    exporter: ExcelExporter = request.app.state.exporter
    try:
        content = exporter.download(name)
    except ExportError as e:
        raise _to_http_error(e) from e

    return Response(
        content=content,
        media_type=APPLICATION_OCTET_STREAM,
        headers={"Content-Disposition": content_disposition(Path(name).stem)},
    )
