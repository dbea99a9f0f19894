from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import DetailedRequirement, RequirementRecord

POLICE_AUTHORITY = "משטרת ישראל"
HEALTH_AUTHORITY = "משרד הבריאות"
FIRE_AUTHORITY = "מכבי האש וההצלה הארצי"

PROCESSING_TIPS: Dict[str, Tuple[str, ...]] = {
    POLICE_AUTHORITY: (
        "יש להגיש בקשה לתחנת משטרה המקומית",
        "תהליך הבדיקה עשוי לקחת 2-4 שבועות",
    ),
    HEALTH_AUTHORITY: (
        "נדרש ביקור של פקח משרד הבריאות במקום",
        "חשוב לוודא תקינות מערכות המים והתברואה",
    ),
    FIRE_AUTHORITY: (
        "נדרש מדידה מקצועית של מערכות הבטיחות",
        "חשוב להכין תוכניות אדריכליות עדכניות",
    ),
}


def find_related_requirements(
    record: RequirementRecord,
    candidates: Iterable[RequirementRecord],
    *,
    limit: int = 3,
) -> List[RequirementRecord]:
    related: List[RequirementRecord] = []
    for candidate in candidates:
        if len(related) >= limit:
            break
        if candidate.requirement_id != record.requirement_id and candidate.authority == record.authority:
            related.append(candidate)
    return related


def get_processing_tips(record: RequirementRecord) -> List[str]:
    return list(PROCESSING_TIPS.get(record.authority, ()))


def build_detailed_requirement(
    record: RequirementRecord,
    candidates: Iterable[RequirementRecord],
    *,
    limit: int = 3,
) -> DetailedRequirement:
    return DetailedRequirement(
        **dict(record),
        related_requirements=tuple(find_related_requirements(record, candidates, limit=limit)),
        processing_tips=tuple(get_processing_tips(record)),
    )
