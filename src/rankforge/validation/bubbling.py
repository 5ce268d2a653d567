"""Presentation status of a tree node, recomputed on every validation pass.

A collapsed parent hides its pay bands, so their worst issue is shown on the
parent instead. Nothing here is stored on the rank itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from rankforge.domain.enums import Severity
from rankforge.domain.models import Rank
from rankforge.validation.issues import ValidationIssue, ValidationResult
from rankforge.validation.progression import RANK_STRUCTURE


@dataclass(frozen=True, slots=True)
class NodeStatus:
    """What a tree row should display for one rank."""

    severity: Severity = Severity.NONE
    message: str = ""

    @property
    def has_issue(self) -> bool:
        return self.severity is not Severity.NONE


def _worst(issues: list[ValidationIssue]) -> Severity:
    return max((issue.severity for issue in issues), default=Severity.NONE)


def node_status(node: Rank, result: ValidationResult, *, is_expanded: bool = True) -> NodeStatus:
    """Combine a node's own issues with those of its pay bands when collapsed."""

    own = result.issues_for_rank(node.id)

    structural = [
        issue
        for issue in own
        if issue.rule_id == RANK_STRUCTURE and issue.property_name == "PayBands"
    ]
    if structural:
        return NodeStatus(Severity.ERROR, "\n".join(issue.message for issue in structural))

    if node.is_parent_with_pay_bands and not is_expanded:
        severity = _worst(own)
        messages = [issue.message for issue in own]
        for band in node.pay_bands:
            band_issues = result.issues_for_rank(band.id)
            severity = max(severity, _worst(band_issues))
            messages.extend(f"{band.name}: {issue.message}" for issue in band_issues)
        if severity is Severity.NONE:
            return NodeStatus()
        return NodeStatus(severity, "\n".join(messages))

    blocking = [issue for issue in own if issue.severity > Severity.ADVISORY]
    severity = _worst(blocking)
    messages = [issue.message for issue in blocking]

    if severity is Severity.NONE:
        advisories = [issue for issue in own if issue.severity is Severity.ADVISORY]
        if advisories:
            return NodeStatus(Severity.ADVISORY, "\n".join(issue.message for issue in advisories))
        return NodeStatus()

    return NodeStatus(severity, "\n".join(messages))
