from __future__ import annotations

from typing import Iterable, List, Optional

from common.licensing_engine.models import (
    BusinessProfile,
    BusinessType,
    LicensingReport,
    MatchResult,
    Priority,
    Recommendation,
    ReportMetadata,
    ReportSection,
)

GENERATED_BY = "System Fallback"
ESTIMATED_COST_PLACEHOLDER = "דרוש חישוב מפורט"
CONSULTANT_THRESHOLD = 5

BUSINESS_TYPE_NAMES = {
    BusinessType.RESTAURANT: "מסעדה",
    BusinessType.CAFE: "בית קפה",
    BusinessType.FAST_FOOD: "מזון מהיר",
    BusinessType.DELIVERY_ONLY: "משלוחים בלבד",
    BusinessType.CATERING: "קייטרינג",
    BusinessType.FOOD_TRUCK: "משאית מזון",
    BusinessType.BAR_PUB: "בר/פאב",
    BusinessType.HOTEL_RESTAURANT: "מסעדת מלון",
}

GENERAL_TIPS = (
    "התחל בתהליכי הרישוי מוקדם ככל הניתן - חלק מהתהליכים יכולים לקחת מספר חודשים",
    "שמור על קשר קבוע עם כל הרשויות הרלוונטיות לקבלת עדכונים",
    "הכן את כל המסמכים הנדרשים מראש כדי למהר את התהליך",
)
CONSULTANT_TIP = "בשל מספר הדרישות הגבוה, מומלץ לשקול העסקת יועץ רישוי"


def business_type_name(business_type: BusinessType) -> str:
    return BUSINESS_TYPE_NAMES.get(business_type, business_type.value)


def authorities_covered(match_result: MatchResult) -> List[str]:
    """Distinct authority names in result order."""
    seen: List[str] = []
    for matched in match_result.all_requirements():
        authority = matched.requirement.authority
        if authority and authority not in seen:
            seen.append(authority)
    return seen


def build_recommendation_list(
    match_result: MatchResult,
    recommendations: Iterable[Recommendation] = (),
) -> List[str]:
    out = [rec.message for rec in recommendations]
    out.extend(GENERAL_TIPS)
    if match_result.summary.mandatory_requirements > CONSULTANT_THRESHOLD:
        out.append(CONSULTANT_TIP)
    return out


def build_fallback_report(
    match_result: MatchResult,
    profile: Optional[BusinessProfile] = None,
    recommendations: Iterable[Recommendation] = (),
) -> LicensingReport:
    """Deterministic report built only from the match result; no external calls."""
    profile = profile or match_result.business_profile
    summary = match_result.summary
    authorities = authorities_covered(match_result)

    return LicensingReport(
        title=f"דוח דרישות רישוי עבור {business_type_name(profile.business_type)}",
        summary=(
            f"נמצאו {summary.total_requirements} דרישות רישוי עבור העסק שלך. "
            f"הדוח כולל דרישות מ-{len(authorities)} רשויות שונות."
        ),
        sections=[
            ReportSection(title="סיכום הדרישות", content=_summary_markdown(match_result, authorities), priority=Priority.HIGH),
            ReportSection(title="דרישות לפי רשות", content=_by_authority_markdown(match_result), priority=Priority.HIGH),
            ReportSection(title="דרישות חובה", content=_mandatory_markdown(match_result), priority=Priority.HIGH),
        ],
        recommendations=build_recommendation_list(match_result, recommendations),
        total_estimated_cost=ESTIMATED_COST_PLACEHOLDER,
        estimated_timeframe=summary.estimated_processing_time,
        metadata=ReportMetadata(
            generated_at=match_result.processed_at,
            business_profile=profile,
            requirements_summary=summary,
            generated_by=GENERATED_BY,
        ),
    )


def _summary_markdown(match_result: MatchResult, authorities: List[str]) -> str:
    summary = match_result.summary
    lines = [
        "## סיכום כללי",
        "",
        f"- **סה\"כ דרישות**: {summary.total_requirements}",
        f"- **דרישות חובה**: {summary.mandatory_requirements}",
        f"- **דרישות רשות**: {summary.optional_requirements}",
        f"- **רשויות מעורבות**: {', '.join(authorities) if authorities else '-'}",
        f"- **זמן טיפול משוער**: {summary.estimated_processing_time}",
        f"- **רמת מורכבות**: {summary.complexity_level.value}",
    ]
    return "\n".join(lines)


def _by_authority_markdown(match_result: MatchResult) -> str:
    by_authority: dict[str, list] = {}
    for matched in match_result.all_requirements():
        by_authority.setdefault(matched.requirement.authority, []).append(matched.requirement)

    lines: List[str] = []
    for authority, records in by_authority.items():
        lines.append(f"### {authority}")
        lines.append("")
        for record in records:
            tag = "🔴 חובה" if record.mandatory else "🟡 מותנה"
            lines.append(f"- **{record.title}** ({tag})")
            if record.description:
                lines.append(f"  - {record.description}")
        lines.append("")
    return "\n".join(lines).strip()


def _mandatory_markdown(match_result: MatchResult) -> str:
    lines = ["## דרישות חובה - פעולות שחייבות לבצע", ""]
    mandatory = [m.requirement for m in match_result.all_requirements() if m.mandatory]
    for index, record in enumerate(mandatory, start=1):
        lines.append(f"{index}. **{record.title}**")
        if record.description:
            lines.append(f"   - {record.description}")
        if record.authority:
            lines.append(f"   - רשות: {record.authority}")
    return "\n".join(lines)
