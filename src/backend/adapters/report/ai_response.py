from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from common.licensing_engine.models import (
    BusinessProfile,
    LicensingReport,
    MatchResult,
    Priority,
    Recommendation,
    ReportMetadata,
    ReportSection,
)

from .fallback import build_recommendation_list, business_type_name

logger = logging.getLogger(__name__)

GENERATED_BY = "OpenRouter AI"
GENERATED_BY_TEXT = "OpenRouter AI (Fallback)"
SUMMARY_PREVIEW_CHARS = 300
NOT_AVAILABLE = "לא זמין"

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def report_from_ai_response(
    text: str,
    match_result: MatchResult,
    profile: Optional[BusinessProfile] = None,
    recommendations: Iterable[Recommendation] = (),
    *,
    generated_at: Optional[datetime] = None,
) -> LicensingReport:
    """Turn generated text into a LicensingReport.

    A JSON object anywhere in the text is validated as the report body. Text
    without usable JSON is wrapped as a single detailed section.
    """
    profile = profile or match_result.business_profile
    generated_at = generated_at or datetime.now(timezone.utc)

    parsed = _parse_json_report(text)
    if parsed is not None:
        return parsed.model_copy(
            update={
                "metadata": ReportMetadata(
                    generated_at=generated_at,
                    business_profile=profile,
                    requirements_summary=match_result.summary,
                    generated_by=GENERATED_BY,
                )
            }
        )

    preview = text[:SUMMARY_PREVIEW_CHARS] + "..."
    return LicensingReport(
        title=f"דוח דרישות רישוי עבור {business_type_name(profile.business_type)}",
        summary=preview,
        sections=[ReportSection(title="דוח מפורט", content=text, priority=Priority.HIGH)],
        recommendations=build_recommendation_list(match_result, recommendations),
        total_estimated_cost=NOT_AVAILABLE,
        estimated_timeframe=NOT_AVAILABLE,
        metadata=ReportMetadata(
            generated_at=generated_at,
            business_profile=profile,
            requirements_summary=match_result.summary,
            generated_by=GENERATED_BY_TEXT,
        ),
    )


def _parse_json_report(text: str) -> Optional[LicensingReport]:
    match = _JSON_BLOCK.search(text or "")
    if match is None:
        return None
    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Generated report contained a JSON-like block that did not parse")
        return None
    if not isinstance(raw, dict):
        return None
    raw.pop("metadata", None)
    try:
        return LicensingReport.model_validate(raw)
    except PydanticValidationError as exc:
        logger.warning("Generated report JSON did not match the report shape: %s", exc.errors()[0].get("msg"))
        return None
