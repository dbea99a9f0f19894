from __future__ import annotations

from typing import Dict, Iterable, List

from .models import AuthorityCategory, ComplexityLevel, MatchedRequirement, MatchSummary

# (inclusive upper bound on total requirements, estimate); anything larger falls through.
PROCESSING_TIME_BANDS = (
    (3, "1-2 weeks"),
    (6, "2-4 weeks"),
    (10, "4-8 weeks"),
)
LONGEST_PROCESSING_TIME = "8-12 weeks"

# (max total, max mandatory, level); both limits must hold for a tier.
COMPLEXITY_TIERS = (
    (4, 3, ComplexityLevel.LOW),
    (8, 6, ComplexityLevel.MEDIUM),
)


def estimate_processing_time(total_requirements: int) -> str:
    for upper, estimate in PROCESSING_TIME_BANDS:
        if total_requirements <= upper:
            return estimate
    return LONGEST_PROCESSING_TIME


def assess_complexity_level(total_requirements: int, mandatory_requirements: int) -> ComplexityLevel:
    for max_total, max_mandatory, level in COMPLEXITY_TIERS:
        if total_requirements <= max_total and mandatory_requirements <= max_mandatory:
            return level
    return ComplexityLevel.HIGH


def group_by_authority(
    requirements: Iterable[MatchedRequirement],
) -> Dict[AuthorityCategory, List[MatchedRequirement]]:
    grouped: Dict[AuthorityCategory, List[MatchedRequirement]] = {c: [] for c in AuthorityCategory}
    for matched in requirements:
        grouped[matched.category].append(matched)
    return grouped


def build_summary(requirements: List[MatchedRequirement]) -> MatchSummary:
    total = len(requirements)
    mandatory = sum(1 for matched in requirements if matched.mandatory)

    counts: Dict[AuthorityCategory, int] = {c: 0 for c in AuthorityCategory}
    for matched in requirements:
        counts[matched.category] += 1

    return MatchSummary(
        total_requirements=total,
        mandatory_requirements=mandatory,
        optional_requirements=total - mandatory,
        authority_counts=counts,
        estimated_processing_time=estimate_processing_time(total),
        complexity_level=assess_complexity_level(total, mandatory),
    )
