"""
test_schemas.py - 레이아웃 설정 모델 테스트

검증:
- validate(): fileName / fields 누락, 병합 좌표 오류, 병합 영역 겹침
- freezePaneIndex: 쉼표 없으면 헤더 행 수만큼 기본 고정
- from_dict(): camelCase / snake_case 키, 문자열 헤더, 리스트 좌표, 항목 타입 검사
- 생성 후 변경 불가 (frozen, tuple, 읽기 전용 formats)
- load_layout_config(): YAML 로드, 파일 없음, YAML 문법 오류
"""

import dataclasses
from pathlib import Path
from typing import Any

import pytest

from easy_excel.domain.errors import ConfigValidationError, ErrorCodes, ExportError
from easy_excel.domain.schemas import (
    CellRange,
    FreezePane,
    HeaderCell,
    LayoutConfig,
    load_layout_config,
    parse_indexes,
)

# =============================================================================
# 좌표
# =============================================================================


class TestParseIndexes:
    """"a,b,c,d" 파싱."""

    def test_string(self):
        assert parse_indexes("0, 1,2 ,3", "mergeIndex") == (0, 1, 2, 3)

    def test_sequence(self):
        assert parse_indexes([1, 2, 3, 4], "mergeIndex") == (1, 2, 3, 4)

    @pytest.mark.parametrize("value", ["0,1,2", "0,1,2,3,4", "a,b,c,d", "0,-1,2,3", ""])
    def test_invalid(self, value: str):
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_indexes(value, "mergeIndex")

        assert exc_info.value.code == ErrorCodes.CONFIG_VALIDATION


class TestCellRange:
    """병합 영역 겹침 판정."""

    def test_overlap(self):
        assert CellRange(0, 1, 0, 1).overlaps(CellRange(1, 2, 1, 2))

    def test_adjacent_does_not_overlap(self):
        assert not CellRange(0, 1, 0, 0).overlaps(CellRange(0, 1, 1, 1))

    def test_cells(self):
        assert CellRange(0, 1, 2, 3).cells() == [(0, 2), (0, 3), (1, 2), (1, 3)]


class TestHeaderCell:
    def test_no_merge(self):
        assert HeaderCell("이름").merge_range() is None

    def test_merge_range(self):
        assert HeaderCell("연락처", "0,0,1,2").merge_range() == CellRange(0, 0, 1, 2)

    def test_reversed_range(self):
        with pytest.raises(ConfigValidationError):
            HeaderCell("연락처", "1,0,1,2").merge_range()

    def test_from_string(self):
        assert HeaderCell.from_dict("이름") == HeaderCell(name="이름")

    def test_from_dict_list_merge(self):
        cell = HeaderCell.from_dict({"name": "연락처", "merge_index": [0, 0, 1, 2]})

        assert cell.merge_index == "0,0,1,2"

    def test_none_name(self):
        assert HeaderCell.from_dict({"name": None}).name == ""


# =============================================================================
# LayoutConfig.validate
# =============================================================================


class TestValidate:
    """필수 항목 / 좌표 검증."""

    def test_valid(self, layout_config: LayoutConfig):
        layout_config.validate()

    def test_empty_file_name(self, layout_dict: dict[str, Any]):
        layout_dict["fileName"] = ""

        with pytest.raises(ConfigValidationError) as exc_info:
            LayoutConfig.from_dict(layout_dict).validate()

        assert "fileName" in exc_info.value.context["error"]

    def test_missing_file_name(self, layout_dict: dict[str, Any]):
        del layout_dict["fileName"]

        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict(layout_dict).validate()

    def test_empty_fields(self, layout_dict: dict[str, Any]):
        layout_dict["fields"] = []

        with pytest.raises(ConfigValidationError) as exc_info:
            LayoutConfig.from_dict(layout_dict).validate()

        assert exc_info.value.context["file_name"] == "members"

    def test_no_headers_is_valid(self):
        LayoutConfig(file_name="plain", fields=["name"]).validate()

    def test_overlapping_merges(self):
        config = LayoutConfig(
            file_name="bad",
            headers=[[HeaderCell("a", "0,1,0,1"), HeaderCell("b", "1,1,1,2")]],
            fields=["name"],
        )

        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate()

        assert exc_info.value.context["error"] == "merge regions overlap"

    def test_malformed_merge_index(self):
        config = LayoutConfig(
            file_name="bad",
            headers=[[HeaderCell("a", "0,1")]],
            fields=["name"],
        )

        with pytest.raises(ConfigValidationError):
            config.validate()

    def test_malformed_freeze_index(self, layout_dict: dict[str, Any]):
        layout_dict["freezePaneIndex"] = "1,x,0,0"

        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict(layout_dict).validate()


# =============================================================================
# Freeze pane
# =============================================================================


class TestFreezePane:
    """틀 고정 위치 결정."""

    def test_default_is_header_rows(self, layout_config: LayoutConfig):
        assert layout_config.freeze_pane() == FreezePane(0, 2, 0, 2)

    def test_explicit(self, layout_dict: dict[str, Any]):
        layout_dict["freezePaneIndex"] = "1,2,3,4"

        config = LayoutConfig.from_dict(layout_dict)

        assert config.freeze_pane() == FreezePane(1, 2, 3, 4)

    def test_without_comma_falls_back(self, layout_dict: dict[str, Any]):
        """쉼표 없는 값은 무시하고 기본 고정."""
        layout_dict["freezePaneIndex"] = "3"

        config = LayoutConfig.from_dict(layout_dict)
        config.validate()

        assert not config.has_explicit_freeze_pane()
        assert config.freeze_pane() == FreezePane(0, 2, 0, 2)

    def test_list_value(self, layout_dict: dict[str, Any]):
        layout_dict["freezePaneIndex"] = [0, 1, 0, 1]

        assert LayoutConfig.from_dict(layout_dict).freeze_pane() == FreezePane(0, 1, 0, 1)

    def test_no_headers(self):
        assert LayoutConfig(file_name="x", fields=["a"]).freeze_pane() == FreezePane(0, 0, 0, 0)


# =============================================================================
# from_dict
# =============================================================================


class TestFromDict:
    """YAML 원본 → LayoutConfig."""

    def test_camel_case(self, layout_config: LayoutConfig):
        assert layout_config.file_name == "members"
        assert layout_config.fields == ("name", "age")
        assert len(layout_config.headers) == 2
        assert layout_config.headers[0][2] == HeaderCell("연락처", "0,1,2,3")

    def test_snake_case(self):
        config = LayoutConfig.from_dict({
            "file_name": "users",
            "fields": ["name"],
            "freeze_pane_index": "0,1,0,1",
        })

        assert config.file_name == "users"
        assert config.freeze_pane_index == "0,1,0,1"

    def test_formats(self):
        config = LayoutConfig.from_dict({
            "fileName": "users",
            "fields": ["joined"],
            "formats": {"joined": "yyyy/MM/dd"},
        })

        assert dict(config.formats) == {"joined": "yyyy/MM/dd"}

    def test_merge_ranges_in_declaration_order(self):
        config = LayoutConfig.from_dict({
            "fileName": "users",
            "headers": [
                [{"name": "a", "mergeIndex": "0,1,0,0"}, {"name": "b", "mergeIndex": "0,0,1,2"}],
            ],
            "fields": ["a"],
        })

        assert config.merge_ranges() == [CellRange(0, 1, 0, 0), CellRange(0, 0, 1, 2)]

    def test_not_a_mapping(self):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict(["fileName"])  # type: ignore[arg-type]


class TestFromDictTypes:
    """항목 타입이 맞지 않으면 ConfigValidationError."""

    def test_scalar_fields(self):
        """fields: name → 글자 단위로 나누지 않고 거부."""
        with pytest.raises(ConfigValidationError) as exc_info:
            LayoutConfig.from_dict({"fileName": "x", "fields": "name"})

        assert exc_info.value.context["error"] == "fields must be a list"

    def test_nested_field_path(self):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict({"fileName": "x", "fields": [{"name": "a"}]})

    @pytest.mark.parametrize("merge", [3, 1.5, True, {"a": 1}])
    def test_merge_index_type(self, merge: Any):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict({
                "fileName": "x",
                "headers": [[{"name": "a", "mergeIndex": merge}]],
                "fields": ["a"],
            })

    def test_freeze_index_type(self):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict({"fileName": "x", "fields": ["a"], "freezePaneIndex": 3})

    @pytest.mark.parametrize("formats", ["yyyy", ["a"]])
    def test_formats_type(self, formats: Any):
        with pytest.raises(ConfigValidationError) as exc_info:
            LayoutConfig.from_dict({"fileName": "x", "fields": ["a"], "formats": formats})

        assert exc_info.value.context["error"] == "formats must be a mapping"

    def test_headers_type(self):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict({"fileName": "x", "fields": ["a"], "headers": "이름"})

    def test_header_row_type(self):
        with pytest.raises(ConfigValidationError):
            LayoutConfig.from_dict({"fileName": "x", "fields": ["a"], "headers": ["이름"]})

    def test_header_cell_type(self):
        with pytest.raises(ConfigValidationError):
            HeaderCell.from_dict(3)  # type: ignore[arg-type]

    def test_yaml_scalar_fields(self, tmp_path: Path):
        path = tmp_path / "scalar.yaml"
        path.write_text("fileName: x\nfields: name\n", encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_layout_config(path)


# =============================================================================
# Immutability
# =============================================================================


class TestImmutability:
    """생성 후 변경 불가."""

    def test_assignment_rejected(self, layout_config: LayoutConfig):
        with pytest.raises(dataclasses.FrozenInstanceError):
            layout_config.file_name = "other"  # type: ignore[misc]

    def test_collections_are_tuples(self, layout_config: LayoutConfig):
        assert isinstance(layout_config.fields, tuple)
        assert isinstance(layout_config.headers, tuple)
        assert all(isinstance(row, tuple) for row in layout_config.headers)

    def test_formats_read_only(self):
        config = LayoutConfig(file_name="x", fields=["a"], formats={"a": "yyyy"})

        with pytest.raises(TypeError):
            config.formats["a"] = "MM"  # type: ignore[index]

    def test_input_lists_not_shared(self):
        fields = ["a"]
        formats = {"a": "yyyy"}
        config = LayoutConfig(file_name="x", fields=fields, formats=formats)

        fields.append("b")
        formats["b"] = "MM"

        assert config.fields == ("a",)
        assert dict(config.formats) == {"a": "yyyy"}

    def test_header_cell_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            HeaderCell("a").name = "b"  # type: ignore[misc]


# =============================================================================
# load_layout_config
# =============================================================================


class TestLoadLayoutConfig:
    """YAML 파일 로드."""

    def test_load(self, layout_yaml: Path):
        config = load_layout_config(layout_yaml)

        assert config.file_name == "members"
        assert config.headers[0][0].name == "이름"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ExportError) as exc_info:
            load_layout_config(tmp_path / "missing.yaml")

        assert exc_info.value.code == ErrorCodes.CONFIG_NOT_FOUND

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("fileName: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_layout_config(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = load_layout_config(path)

        with pytest.raises(ConfigValidationError):
            config.validate()

    def test_shipped_users_layout(self):
        """exports/users.yaml 예제는 유효해야 함."""
        path = Path(__file__).parents[3] / "exports" / "users.yaml"

        config = load_layout_config(path)
        config.validate()

        assert config.fields == ("name", "contact.phone", "contact.email", "joined_at")
