"""Validation issues and the result container returned by every pass."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from rankforge.domain.enums import IssueCategory, Severity
from rankforge.domain.models import RankID

MAX_LISTED_ERRORS = 10
MAX_LISTED_ADVISORIES = 5


@dataclass(slots=True)
class ValidationIssue:
    """A single finding against a rank, pay band or one of its items."""

    severity: Severity
    category: IssueCategory
    message: str
    rank_id: RankID | None = None
    rank_name: str | None = None
    item_name: str | None = None
    property_name: str | None = None
    rule_id: str = ""
    suggested_fix: str | None = None
    auto_fix: Callable[[], None] | None = field(default=None, compare=False, repr=False)

    @property
    def is_auto_fixable(self) -> bool:
        return self.auto_fix is not None

    def apply_fix(self) -> bool:
        """Run the attached auto-fix; return whether one was available."""

        if self.auto_fix is None:
            return False
        self.auto_fix()
        return True

    def __str__(self) -> str:
        prefix = f"[{self.rank_name}] " if self.rank_name else ""
        return f"{prefix}{self.message}"


@dataclass(slots=True)
class ValidationResult:
    """Ordered collection of issues with severity-based queries."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def add(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[ValidationIssue]) -> None:
        self.issues.extend(issues)

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Append ``other``'s issues to this result and return ``self``."""

        self.issues.extend(other.issues)
        return self

    # -- severity views -----------------------------------------------------

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def advisories(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ADVISORY]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def advisory_count(self) -> int:
        return len(self.advisories)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity is Severity.ERROR for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity is Severity.WARNING for issue in self.issues)

    @property
    def has_advisories(self) -> bool:
        return any(issue.severity is Severity.ADVISORY for issue in self.issues)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    @property
    def is_valid(self) -> bool:
        """True when nothing blocks generation of the output file."""

        return not self.has_errors

    @property
    def worst_severity(self) -> Severity:
        return max((issue.severity for issue in self.issues), default=Severity.NONE)

    # -- filtering ----------------------------------------------------------

    def filter_by_severity(self, minimum: Severity) -> list[ValidationIssue]:
        """Issues at ``minimum`` severity or above."""

        return [issue for issue in self.issues if issue.severity >= minimum]

    def issues_for_rank(self, rank_id: RankID) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.rank_id == rank_id]

    def issues_by_category(self, category: str) -> list[ValidationIssue]:
        wanted = category.casefold()
        return [issue for issue in self.issues if issue.category.casefold() == wanted]

    def issues_by_rule(self, rule_id: str) -> list[ValidationIssue]:
        wanted = rule_id.casefold()
        return [issue for issue in self.issues if issue.rule_id.casefold() == wanted]

    def auto_fixable_issues(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.is_auto_fixable]

    # -- reporting ----------------------------------------------------------

    def summary(self) -> str:
        """Multi-line report grouped by severity."""

        if not self.issues:
            return "No validation issues"

        lines: list[str] = []
        errors = self.errors
        if errors:
            lines.append(f"{len(errors)} Error(s) Found")
            lines.extend(f"  - {issue}" for issue in errors[:MAX_LISTED_ERRORS])
            if len(errors) > MAX_LISTED_ERRORS:
                lines.append(f"  ... and {len(errors) - MAX_LISTED_ERRORS} more error(s)")

        warnings = self.warnings
        if warnings:
            if lines:
                lines.append("")
            lines.append(f"{len(warnings)} Warning(s) Found")
            lines.extend(f"  - {issue}" for issue in warnings)

        advisories = self.advisories
        if advisories:
            if lines:
                lines.append("")
            lines.append(f"{len(advisories)} Advisory Notice(s)")
            lines.extend(f"  - {issue}" for issue in advisories[:MAX_LISTED_ADVISORIES])
            if len(advisories) > MAX_LISTED_ADVISORIES:
                extra = len(advisories) - MAX_LISTED_ADVISORIES
                lines.append(f"  ... and {extra} more advisory notice(s)")

        return "\n".join(lines)

    def compact_summary(self) -> str:
        """Single line such as ``"1 error(s), 2 warning(s)"``."""

        if not self.issues:
            return "No issues"
        parts: list[str] = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        if self.advisory_count:
            parts.append(f"{self.advisory_count} advisory notice(s)")
        return ", ".join(parts)
