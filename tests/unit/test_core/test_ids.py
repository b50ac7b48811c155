"""
test_ids.py - artifact 이름 생성 테스트

검증:
- 포맷: {file_name}_{uuid4}.{extension}
- 고유성: 매 호출 시 다른 값
- 안전한 파일명 판정 (경로 구분자 / . / .. 거부)
"""

import pytest

from easy_excel.core.ids import generate_artifact_name, is_artifact_name, is_safe_name

# =============================================================================
# generate_artifact_name 테스트
# =============================================================================


class TestGenerateArtifactName:
    """generate_artifact_name 함수 테스트."""

    def test_format(self):
        """{file_name}_{uuid}.xlsx 형식."""
        name = generate_artifact_name("users")

        assert name.startswith("users_")
        assert name.endswith(".xlsx")
        assert is_artifact_name(name, "users")

    def test_unique(self):
        """매 호출 시 다른 이름."""
        names = {generate_artifact_name("users") for _ in range(50)}

        assert len(names) == 50

    def test_custom_extension(self):
        name = generate_artifact_name("report", "xls")

        assert name.endswith(".xls")
        assert is_artifact_name(name, "report", "xls")

    def test_non_ascii_file_name(self):
        name = generate_artifact_name("회원목록")

        assert is_artifact_name(name, "회원목록")


# =============================================================================
# is_artifact_name 테스트
# =============================================================================


class TestIsArtifactName:
    """형식 검사."""

    def test_any_prefix(self):
        assert is_artifact_name(generate_artifact_name("a_b"))

    def test_prefix_mismatch(self):
        assert not is_artifact_name(generate_artifact_name("users"), "orders")

    def test_extension_mismatch(self):
        assert not is_artifact_name(generate_artifact_name("users", "csv"), "users")

    def test_not_a_uuid(self):
        assert not is_artifact_name("users_1234.xlsx")

    def test_prefix_is_escaped(self):
        """file_name 의 정규식 문자는 그대로 비교."""
        name = generate_artifact_name("a.b")

        assert is_artifact_name(name, "a.b")
        assert not is_artifact_name(name.replace("a.b", "axb", 1), "a.b")


# =============================================================================
# is_safe_name 테스트
# =============================================================================


class TestIsSafeName:
    """저장소 루트 밖을 가리키는 이름 거부."""

    @pytest.mark.parametrize(
        "name",
        ["", ".", "..", "../secret.xlsx", "a/b.xlsx", "a\\b.xlsx", "C:evil.xlsx", "a\0b"],
    )
    def test_rejected(self, name: str):
        assert not is_safe_name(name)

    @pytest.mark.parametrize("name", ["users.xlsx", "회원_1.xlsx", "..hidden.xlsx"])
    def test_accepted(self, name: str):
        assert is_safe_name(name)
