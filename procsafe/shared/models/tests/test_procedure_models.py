"""Tests for procedure and issue value objects."""
import pytest

from procsafe.shared.models import (
    Issue,
    IssueCategory,
    ProcedureId,
    ProcedureInfo,
    Severity,
    UnknownProcedureError,
)


class TestIssue:
    """Tests for Issue."""

    def test_key_ignores_severity_and_tags(self):
        a = Issue(IssueCategory.CONSIDERATION, "check INR", Severity.MEDIUM, ("a",))
        b = Issue(IssueCategory.CONSIDERATION, "check INR", Severity.HIGH)
        assert a.key == b.key
        assert a != b

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            Issue(IssueCategory.CONSIDERATION, "", Severity.LOW)

    def test_tags_default_empty(self):
        assert Issue(IssueCategory.RED_FLAG, "stop", Severity.HIGH).tags == ()

    def test_is_red_flag(self):
        assert Issue(IssueCategory.RED_FLAG, "stop", Severity.HIGH).is_red_flag
        assert not Issue(IssueCategory.CONTRAINDICATION, "stop", Severity.HIGH).is_red_flag

    def test_red_flag_value(self):
        """Category value uses a hyphen for API consumers."""
        assert IssueCategory.RED_FLAG.value == "red-flag"

    def test_to_dict(self):
        issue = Issue(IssueCategory.CONTRAINDICATION, "stop", Severity.HIGH, ("trauma",))
        assert issue.to_dict() == {
            "category": "contraindication",
            "text": "stop",
            "severity": "high",
            "tags": ["trauma"],
        }


class TestProcedureInfo:
    """Tests for ProcedureInfo."""

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            ProcedureInfo(
                id=ProcedureId.NG_TUBE,
                name="",
                summary="s",
                contraindications=(),
                considerations=(),
                equipment=(),
            )


class TestUnknownProcedureError:
    """Tests for UnknownProcedureError."""

    def test_carries_value(self):
        error = UnknownProcedureError("chest_drain")
        assert error.value == "chest_drain"
        assert "chest_drain" in str(error)
