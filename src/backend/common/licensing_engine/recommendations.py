from __future__ import annotations

from typing import List, Optional

from .config import AdvisorThresholds
from .models import BusinessProfile, Priority, Recommendation

SIZE_WARNING = "size_warning"
ALCOHOL_LICENSE = "alcohol_license"
FIRE_SAFETY = "fire_safety"


def get_business_recommendations(
    profile: BusinessProfile,
    thresholds: Optional[AdvisorThresholds] = None,
) -> List[Recommendation]:
    """Advisory notes derived from the profile alone (never from a match result)."""
    limits = thresholds or AdvisorThresholds()
    recommendations: List[Recommendation] = []

    if profile.seating_capacity > limits.large_seating_capacity or profile.floor_area > limits.large_floor_area:
        recommendations.append(
            Recommendation(
                type=SIZE_WARNING,
                message="בעסק בגודל זה נדרשים אישורים נוספים ותהליך מורכב יותר",
                priority=Priority.HIGH,
            )
        )

    if profile.services.get("alcoholService", False):
        recommendations.append(
            Recommendation(
                type=ALCOHOL_LICENSE,
                message="רישיון אלכוהול דורש תהליך נפרד ועלול להאריך את התהליך",
                priority=Priority.HIGH,
            )
        )

    if profile.kitchen_features.get("gasUsage", False) and profile.floor_area > limits.gas_floor_area:
        recommendations.append(
            Recommendation(
                type=FIRE_SAFETY,
                message="שימוש בגז בשטח גדול דורש מערכות כיבוי מתקדמות",
                priority=Priority.MEDIUM,
            )
        )

    return recommendations
