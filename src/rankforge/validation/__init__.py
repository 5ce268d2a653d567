"""Validation engine for rank hierarchies.

Validation is a pure function of the hierarchy: it returns a
:class:`ValidationResult` and never mutates ranks or raises for bad data.
Rules are grouped by id (structure, progression, references, advisories)
and selected per :class:`~rankforge.domain.enums.ValidationContext`.
"""

from rankforge.validation.advisory import ADVISORY_CHECKS
from rankforge.validation.bubbling import NodeStatus, node_status
from rankforge.validation.engine import DEFAULT_RULES, ValidationRule, validate, validate_rank
from rankforge.validation.issues import ValidationIssue, ValidationResult
from rankforge.validation.progression import RANK_PROGRESSION, RANK_STRUCTURE, predecessor_of
from rankforge.validation.references import REFERENCE_VALIDATION, CatalogSet

__all__ = [
    "ADVISORY_CHECKS",
    "CatalogSet",
    "DEFAULT_RULES",
    "NodeStatus",
    "RANK_PROGRESSION",
    "RANK_STRUCTURE",
    "REFERENCE_VALIDATION",
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "node_status",
    "predecessor_of",
    "validate",
    "validate_rank",
]
