"""Flattening of character check reports for outer layers.

``DuneCharacter.check(fail_on_first=False)`` returns nested dictionaries of
exceptions. Outer layers (a REST adapter, the CLI) want a flat, JSON-ready
list instead.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dunechar.errors import DuneCharacterError, ErrorKind
from dunechar.model.character import SUB_GROUPS, CharacterReport


class ValidationIssue(BaseModel):
    """A single problem found in a character.

    Attributes:
        sub_group: Sub-group of the member ("traits", "skills", ...).
        entity: Name of the offending member.
        kind: Kind of the error.
        message: Human readable message.
    """

    sub_group: str = Field(description="Sub-group of the offending member")
    entity: str = Field(description="Name of the offending member")
    kind: ErrorKind = Field(description="Kind of the error")
    message: str = Field(description="Human readable message")

    @classmethod
    def from_error(cls, sub_group: str, entity: str, error: DuneCharacterError) -> ValidationIssue:
        return cls(sub_group=sub_group, entity=entity, kind=error.kind, message=str(error))


def issues_from_report(report: CharacterReport) -> list[ValidationIssue]:
    """Flatten a character report.

    Args:
        report: Errors by sub-group and member name.

    Returns:
        Issues ordered by sub-group, then by member as reported.
    """
    ordered = [group for group in SUB_GROUPS if group in report]
    ordered += [group for group in report if group not in SUB_GROUPS]
    return [
        ValidationIssue.from_error(group, entity, error)
        for group in ordered
        for entity, errors in report[group].items()
        for error in errors
    ]


def report_has_errors(report: CharacterReport) -> bool:
    """True if any sub-group of the report holds an error."""
    return any(errors for group in report.values() for errors in group.values())
