"""Per-node progression and structure checks.

Every rank and pay band is compared against its logical predecessor:

* the previous pay band, for pay bands after the first;
* the previous top-level rank (its highest pay band when it has any), for
  first pay bands and top-level ranks;
* nothing, for the very first node of the hierarchy.

Parents that own pay bands derive their XP and salary from the bands and are
only checked for structure (name, pay-band count).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from rankforge.domain.enums import IssueCategory, Severity
from rankforge.domain.models import Rank, RankHierarchy
from rankforge.validation.issues import ValidationIssue

RANK_PROGRESSION = "RANK_PROGRESSION"
RANK_STRUCTURE = "RANK_STRUCTURE"

PREVIOUS_PAY_BAND = "previous pay band"
PREVIOUS_RANK = "previous rank"


@dataclass(frozen=True, slots=True)
class Predecessor:
    """XP and salary a node has to be measured against."""

    required_points: int
    salary: int | None
    label: str


def predecessor_of(hierarchy: RankHierarchy, node: Rank) -> Predecessor | None:
    """Return the logical predecessor of ``node`` or ``None`` for the first node."""

    parent = hierarchy.parent_of(node)
    if parent is not None:
        band_index = hierarchy.index_of(node)
        assert band_index >= 0, f"pay band {node.id} missing from parent {parent.id}"
        if band_index > 0:
            previous_band = parent.pay_bands[band_index - 1]
            return Predecessor(previous_band.required_points, previous_band.salary, PREVIOUS_PAY_BAND)
        anchor = parent
    else:
        anchor = node

    rank_index = hierarchy.index_of(anchor)
    assert rank_index >= 0, f"rank {anchor.id} is not part of the hierarchy"
    if rank_index == 0:
        # First pay band of the first rank still may not go below zero.
        return Predecessor(0, None, PREVIOUS_RANK) if parent is not None else None
    previous = hierarchy.ranks[rank_index - 1]
    return Predecessor(previous.max_required_points, previous.max_salary, PREVIOUS_RANK)


def _is_first_pay_band(hierarchy: RankHierarchy, node: Rank) -> bool:
    return node.is_pay_band and hierarchy.index_of(node) == 0


def check_progression(hierarchy: RankHierarchy, node: Rank) -> list[ValidationIssue]:
    """XP and salary checks for a leaf rank or pay band."""

    if node.is_parent_with_pay_bands:
        return []

    issues: list[ValidationIssue] = []
    predecessor = predecessor_of(hierarchy, node)
    first_band = _is_first_pay_band(hierarchy, node)

    def issue(
        severity: Severity,
        message: str,
        prop: str,
        suggested_fix: str,
        auto_fix: Callable[[], None] | None = None,
    ) -> ValidationIssue:
        return ValidationIssue(
            severity=severity,
            category=IssueCategory.RANK,
            message=message,
            rank_id=node.id,
            rank_name=node.name,
            property_name=prop,
            rule_id=RANK_PROGRESSION,
            suggested_fix=suggested_fix,
            auto_fix=auto_fix,
        )

    points = node.required_points
    if points < 0:
        issues.append(
            issue(
                Severity.ERROR,
                "Required Points must be greater than or equal to 0",
                "RequiredPoints",
                suggested_fix="Set Required Points to 0 or higher.",
                auto_fix=partial(setattr, node, "required_points", 0),
            )
        )
    elif predecessor is not None:
        minimum = predecessor.required_points
        if first_band and points < minimum:
            issues.append(
                issue(
                    Severity.ERROR,
                    f"Required Points must be greater than or equal to {minimum} ({predecessor.label})",
                    "RequiredPoints",
                    suggested_fix=f"Set Required Points to at least {minimum}.",
                )
            )
        elif not first_band and points <= minimum:
            issues.append(
                issue(
                    Severity.ERROR,
                    f"Required Points must be greater than {minimum} ({predecessor.label})",
                    "RequiredPoints",
                    suggested_fix=f"Set Required Points to at least {minimum + 1}.",
                )
            )

    if node.salary < 0:
        issues.append(
            issue(
                Severity.ERROR,
                "Salary must be greater than or equal to 0",
                "Salary",
                suggested_fix="Set Salary to 0 or higher.",
                auto_fix=partial(setattr, node, "salary", 0),
            )
        )
    elif predecessor is not None and predecessor.salary is not None and node.salary < predecessor.salary:
        issues.append(
            issue(
                Severity.WARNING,
                f"Salary is lower than previous ({predecessor.salary})",
                "Salary",
                suggested_fix="Consider increasing the salary to maintain progression.",
            )
        )
    return issues


def check_structure(hierarchy: RankHierarchy, node: Rank) -> list[ValidationIssue]:
    """Name and pay-band count checks; applies to every node including parents."""

    issues: list[ValidationIssue] = []

    def issue(severity: Severity, message: str, prop: str, fix: str) -> ValidationIssue:
        return ValidationIssue(
            severity=severity,
            category=IssueCategory.RANK,
            message=message,
            rank_id=node.id,
            rank_name=node.name,
            property_name=prop,
            rule_id=RANK_STRUCTURE,
            suggested_fix=fix,
        )

    if node.is_parent and len(node.pay_bands) == 1:
        issues.append(
            issue(
                Severity.ERROR,
                "Rank must have more than one pay band",
                "PayBands",
                "Add another pay band or promote the remaining one.",
            )
        )

    name = node.name.strip()
    if not name:
        issues.append(
            issue(Severity.ERROR, "Rank name cannot be empty.", "Name", "Enter a name for this rank.")
        )
        return issues

    folded = name.casefold()
    duplicate = any(
        other.id != node.id and other.name.strip().casefold() == folded for other in hierarchy.nodes()
    )
    if duplicate:
        issues.append(
            issue(
                Severity.ADVISORY,
                "Another rank already uses this name",
                "Name",
                "Choose a different name to make this rank unique.",
            )
        )
    return issues


def check_progression_rule(hierarchy: RankHierarchy) -> list[ValidationIssue]:
    """Run :func:`check_progression` over every node in tree order."""

    issues: list[ValidationIssue] = []
    for node in hierarchy.nodes():
        issues.extend(check_progression(hierarchy, node))
    return issues


def check_structure_rule(hierarchy: RankHierarchy) -> list[ValidationIssue]:
    """Run :func:`check_structure` over every node, flagging an empty hierarchy."""

    if not hierarchy.ranks:
        return [
            ValidationIssue(
                severity=Severity.ERROR,
                category=IssueCategory.RANK,
                message="No ranks defined. At least one rank is required.",
                rule_id=RANK_STRUCTURE,
                suggested_fix="Add at least one rank to the configuration.",
            )
        ]
    issues: list[ValidationIssue] = []
    for node in hierarchy.nodes():
        issues.extend(check_structure(hierarchy, node))
    return issues
