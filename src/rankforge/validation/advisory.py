"""Cross-rank advisories over the flattened rank sequence.

These never block generation. They point out items a rank lost compared to
the rank right before it, and ranks that have nothing to drive or wear.
"""

from __future__ import annotations

from collections.abc import Iterable

from rankforge.domain.enums import IssueCategory, Severity
from rankforge.domain.models import Rank, RankHierarchy
from rankforge.validation.issues import ValidationIssue

ADVISORY_CHECKS = "ADVISORY_CHECKS"

MAX_LISTED_ITEMS = 3


def format_item_list(items: list[str]) -> str:
    """Join up to three names and summarize the rest as ``"and N more"``."""

    listed = ", ".join(items[:MAX_LISTED_ITEMS])
    if len(items) > MAX_LISTED_ITEMS:
        listed += f" and {len(items) - MAX_LISTED_ITEMS} more"
    return listed


def missing_items(previous: Iterable[str], current: Iterable[str]) -> list[str]:
    """Names present in ``previous`` but not in ``current``, case-insensitively.

    Order follows ``previous`` and repeated names are reported once.
    """

    present = {name.casefold() for name in current}
    missing: list[str] = []
    seen: set[str] = set()
    for name in previous:
        folded = name.casefold()
        if folded in present or folded in seen:
            continue
        seen.add(folded)
        missing.append(name)
    return missing


def _advisory(rank: Rank, category: IssueCategory, message: str) -> ValidationIssue:
    return ValidationIssue(
        severity=Severity.ADVISORY,
        category=category,
        message=message,
        rank_id=rank.id,
        rank_name=rank.name,
        rule_id=ADVISORY_CHECKS,
    )


def _compare(
    previous: Rank,
    current: Rank,
    category: IssueCategory,
    noun: str,
    previous_names: list[str],
    current_names: list[str],
) -> ValidationIssue | None:
    removed = missing_items(previous_names, current_names)
    if removed:
        return _advisory(
            current,
            category,
            f"Rank '{current.name}' is missing {len(removed)} {noun}(s) that were available "
            f"in '{previous.name}': {format_item_list(removed)}. Consider if this is intentional.",
        )
    if len(current_names) < len(previous_names):
        return _advisory(
            current,
            category,
            f"Rank '{current.name}' has {len(current_names)} {noun}(s), but previous rank "
            f"'{previous.name}' had {len(previous_names)} {noun}(s). "
            "Consider if this reduction is intentional.",
        )
    return None


def compare_with_previous(previous: Rank, current: Rank) -> list[ValidationIssue]:
    """Advisories for stations, vehicles and outfits ``current`` dropped."""

    comparisons = (
        (
            IssueCategory.STATION,
            "station",
            [s.station_name for s in previous.stations],
            [s.station_name for s in current.stations],
        ),
        (
            IssueCategory.VEHICLE,
            "vehicle",
            [v.model for v in previous.vehicles],
            [v.model for v in current.vehicles],
        ),
        (IssueCategory.OUTFIT, "outfit", list(previous.outfits), list(current.outfits)),
    )
    issues: list[ValidationIssue] = []
    for category, noun, previous_names, current_names in comparisons:
        issue = _compare(previous, current, category, noun, previous_names, current_names)
        if issue is not None:
            issues.append(issue)
    return issues


def check_empty_assignments(rank: Rank) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not rank.has_any_vehicles():
        issues.append(
            _advisory(
                rank,
                IssueCategory.VEHICLE,
                f"Rank '{rank.name}' has no vehicles assigned (global or station-specific). "
                "Consider adding at least one vehicle for this rank.",
            )
        )
    if not rank.has_any_outfits():
        issues.append(
            _advisory(
                rank,
                IssueCategory.OUTFIT,
                f"Rank '{rank.name}' has no outfits assigned (global or station-specific). "
                "Consider adding at least one outfit for this rank.",
            )
        )
    return issues


def check_advisory_rule(hierarchy: RankHierarchy) -> list[ValidationIssue]:
    """Run every advisory over the flattened rank sequence."""

    flat = hierarchy.flatten()
    issues: list[ValidationIssue] = []
    for index, rank in enumerate(flat):
        issues.extend(check_empty_assignments(rank))
        if index > 0:
            issues.extend(compare_with_previous(flat[index - 1], rank))
    return issues
