"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn easy_excel.app.main:app --reload
- 프로덕션: uv run uvicorn easy_excel.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI

from easy_excel.app.routes import exports
from easy_excel.core.storage import ArtifactStore, DeletionQueue
from easy_excel.domain.constants import TEMP_EXCEL_DIR, XLSX
from easy_excel.services.exporter import ExcelExporter

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def _resolve_path(value: str | None, default: str) -> Path:
    path = Path(value or default)
    return path if path.is_absolute() else PROJECT_ROOT / path


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 삭제 큐/저장소/exporter 생성
    종료 시: 삭제 큐 종료 (예약된 삭제 완료까지 대기)
    """
    # Startup
    config = load_config()
    storage = config.get("storage", {})
    deletion = config.get("deletion", {})

    deletion_queue = DeletionQueue(
        max_workers=deletion.get("max_workers"),
        queue_size=deletion.get("queue_size"),
    )
    store = ArtifactStore(
        root=_resolve_path(storage.get("root"), TEMP_EXCEL_DIR),
        deletion_queue=deletion_queue,
        extension=storage.get("extension", XLSX),
    )

    app.state.config = config
    app.state.exports_root = _resolve_path(config.get("exports", {}).get("root"), "exports")
    app.state.exporter = ExcelExporter(store)

    yield

    # Shutdown
    deletion_queue.shutdown(wait=True)
    logger.info("Deletion queue shut down")


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Easy Excel Export",
    description="YAML 레이아웃 + 레코드 → 엑셀 파일",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(exports.api_router, prefix="/api/exports", tags=["Exports API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "easy_excel.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
