"""Validation engine: runs the registered rules for a validation context."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from rankforge.domain.enums import ValidationContext
from rankforge.domain.models import Rank, RankHierarchy
from rankforge.validation.advisory import ADVISORY_CHECKS, check_advisory_rule
from rankforge.validation.issues import ValidationIssue, ValidationResult
from rankforge.validation.progression import (
    RANK_PROGRESSION,
    RANK_STRUCTURE,
    check_progression_rule,
    check_structure_rule,
)
from rankforge.validation.references import REFERENCE_VALIDATION, CatalogSet, check_reference_rule

logger = logging.getLogger(__name__)

RuleCheck = Callable[[RankHierarchy, ValidationContext, CatalogSet], list[ValidationIssue]]


@dataclass(frozen=True, slots=True)
class ValidationRule:
    """A named check together with the contexts it runs in."""

    rule_id: str
    name: str
    contexts: frozenset[ValidationContext]
    check: RuleCheck

    def applies_to(self, context: ValidationContext) -> bool:
        return context in self.contexts


_STRUCTURAL_CONTEXTS = frozenset(
    {
        ValidationContext.FULL,
        ValidationContext.REAL_TIME,
        ValidationContext.PRE_GENERATE,
        ValidationContext.STARTUP,
    }
)


def _progression(hierarchy: RankHierarchy, context: ValidationContext, catalogs: CatalogSet) -> list[ValidationIssue]:
    return check_progression_rule(hierarchy)


def _structure(hierarchy: RankHierarchy, context: ValidationContext, catalogs: CatalogSet) -> list[ValidationIssue]:
    return check_structure_rule(hierarchy)


def _advisory(hierarchy: RankHierarchy, context: ValidationContext, catalogs: CatalogSet) -> list[ValidationIssue]:
    return check_advisory_rule(hierarchy)


def _references(hierarchy: RankHierarchy, context: ValidationContext, catalogs: CatalogSet) -> list[ValidationIssue]:
    gate = context in (ValidationContext.PRE_GENERATE, ValidationContext.STARTUP)
    return check_reference_rule(hierarchy, catalogs, require_stations=gate)


DEFAULT_RULES: tuple[ValidationRule, ...] = (
    ValidationRule(RANK_STRUCTURE, "Rank Structure Validation", _STRUCTURAL_CONTEXTS, _structure),
    ValidationRule(RANK_PROGRESSION, "Rank Progression Validation", _STRUCTURAL_CONTEXTS, _progression),
    ValidationRule(
        REFERENCE_VALIDATION,
        "Reference Validation",
        frozenset({ValidationContext.FULL, ValidationContext.PRE_GENERATE, ValidationContext.STARTUP}),
        _references,
    ),
    ValidationRule(
        ADVISORY_CHECKS,
        "Advisory Checks",
        frozenset(
            {
                ValidationContext.FULL,
                ValidationContext.REAL_TIME,
                ValidationContext.STARTUP,
                ValidationContext.ADVISORY_ONLY,
            }
        ),
        _advisory,
    ),
)


def validate(
    hierarchy: RankHierarchy,
    *,
    context: ValidationContext = ValidationContext.FULL,
    catalogs: CatalogSet | None = None,
    rules: tuple[ValidationRule, ...] = DEFAULT_RULES,
) -> ValidationResult:
    """Evaluate every rule applicable to ``context``; never mutates the hierarchy."""

    catalogs = catalogs or CatalogSet()
    result = ValidationResult()
    for rule in rules:
        if rule.applies_to(context):
            result.extend(rule.check(hierarchy, context, catalogs))
    logger.debug("validation (%s) complete: %s", context, result.compact_summary())
    return result


def validate_rank(
    hierarchy: RankHierarchy,
    rank: Rank,
    *,
    context: ValidationContext = ValidationContext.REAL_TIME,
    catalogs: CatalogSet | None = None,
) -> ValidationResult:
    """Issues attached to ``rank`` or one of its pay bands."""

    wanted = {rank.id, *(band.id for band in rank.pay_bands)}
    full = validate(hierarchy, context=context, catalogs=catalogs)
    return ValidationResult([issue for issue in full.issues if issue.rank_id in wanted])
