"""Tests for report flattening."""

from __future__ import annotations

from dunechar.errors import ErrorKind
from dunechar.model.character import DuneCharacter
from dunechar.report import ValidationIssue, issues_from_report, report_has_errors


def broken_character() -> DuneCharacter:
    return DuneCharacter(
        skills={"Battle": "x"},
        traits=[{"name": "Thief"}, {"name": "Thief"}],
        fail_on_first=False,
    )


class TestIssuesFromReport:
    """Tests for issues_from_report."""

    def test_flattens_in_sub_group_order(self) -> None:
        issues = issues_from_report(broken_character().check(fail_on_first=False))
        assert [(issue.sub_group, issue.entity, issue.kind) for issue in issues] == [
            ("traits", "Thief", ErrorKind.DUPLICATE),
            ("skills", "Battle", ErrorKind.TYPE),
        ]
        assert issues[0].message == "Duplicate trait at 0 and 1"

    def test_clean_report(self) -> None:
        report = DuneCharacter("Paul").check(fail_on_first=False)
        assert issues_from_report(report) == []
        assert not report_has_errors(report)

    def test_report_has_errors(self) -> None:
        assert report_has_errors(broken_character().check(fail_on_first=False))

    def test_json_form(self) -> None:
        issue = issues_from_report(broken_character().check(fail_on_first=False))[0]
        assert isinstance(issue, ValidationIssue)
        assert issue.model_dump(mode="json") == {
            "sub_group": "traits",
            "entity": "Thief",
            "kind": "duplicate",
            "message": "Duplicate trait at 0 and 1",
        }
