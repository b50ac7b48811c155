"""
Pytest fixtures for the export engine tests.

구성:
- 레코드 샘플 (dataclass, private 속성, Mapping)
- 레이아웃 설정 (dict / LayoutConfig / YAML 파일)
- 임시 저장소 (삭제 큐 포함)
"""

from collections.abc import Generator
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pytest
import yaml

from easy_excel.core.storage import ArtifactStore, DeletionQueue
from easy_excel.domain.schemas import LayoutConfig

# =============================================================================
# Record Fixtures
# =============================================================================


@dataclass
class Contact:
    phone: str
    email: str | None = None


@dataclass
class Member:
    name: str
    age: int
    contact: Contact | None = None
    joined: date | None = field(default=None, metadata={"format": "yyyy.MM.dd"})
    last_login: datetime | None = None


@pytest.fixture
def members() -> list[Member]:
    """데이터 레코드 3개."""
    return [
        Member("Ann", 30, Contact("010-1111-2222", "ann@example.com"), date(2024, 1, 5)),
        Member("Bob", 41, Contact("010-3333-4444")),
        Member("Cid", 25, None, date(2023, 12, 31), datetime(2024, 2, 1, 9, 30, 0)),
    ]


@pytest.fixture
def member_rows() -> list[dict[str, Any]]:
    """Mapping 레코드 (JSON 요청 본문 형태)."""
    return [
        {"name": "Ann", "age": 30},
        {"name": "Bob", "age": 41},
        {"name": "Cid", "age": 25},
    ]


# =============================================================================
# Layout Fixtures
# =============================================================================


@pytest.fixture
def layout_dict() -> dict[str, Any]:
    """
    헤더 2행 + 병합 영역 1개 (0~1행, 2~3열) + 필드 2개.

    Row 0: 이름 | 나이 | 연락처(병합) | ""
    Row 1: ""   | ""   | ""           | ""
    """
    return {
        "fileName": "members",
        "headers": [
            [
                {"name": "이름"},
                {"name": "나이"},
                {"name": "연락처", "mergeIndex": "0,1,2,3"},
                {"name": ""},
            ],
            [{"name": ""}, {"name": ""}, {"name": ""}, {"name": ""}],
        ],
        "fields": ["name", "age"],
    }


@pytest.fixture
def layout_config(layout_dict: dict[str, Any]) -> LayoutConfig:
    """검증된 LayoutConfig."""
    config = LayoutConfig.from_dict(layout_dict)
    config.validate()
    return config


@pytest.fixture
def layout_yaml(tmp_path: Path, layout_dict: dict[str, Any]) -> Path:
    """레이아웃 YAML 파일."""
    path = tmp_path / "layouts" / "members.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(yaml.safe_dump(layout_dict, allow_unicode=True), encoding="utf-8")
    return path


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def deletion_queue() -> Generator[DeletionQueue, None, None]:
    """테스트용 삭제 큐 (종료 시 shutdown)."""
    queue = DeletionQueue(max_workers=2, queue_size=4)
    yield queue
    queue.shutdown(wait=True)


@pytest.fixture
def artifact_store(tmp_path: Path, deletion_queue: DeletionQueue) -> ArtifactStore:
    """tmp_path/temp 아래 임시 저장소."""
    return ArtifactStore(root=tmp_path / "temp", deletion_queue=deletion_queue)
