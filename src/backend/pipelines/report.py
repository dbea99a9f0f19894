from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http.client import HTTPException
from typing import Any, Callable, Mapping, Optional, Union

from adapters.report import build_fallback_report, build_report_messages, report_from_ai_response
from common.licensing_engine.engine import MatchingEngine
from common.licensing_engine.models import BusinessProfile, LicensingReport, MatchResult, Recommendation
from connectors.openrouter.client import OpenRouterHttpError, chat_completion
from connectors.openrouter.config import OpenRouterConfig, get_openrouter_config

logger = logging.getLogger(__name__)

Completion = Callable[[OpenRouterConfig, list], str]


@dataclass(frozen=True)
class ReportBundle:
    report: LicensingReport
    requirements: MatchResult
    recommendations: tuple[Recommendation, ...] = field(default_factory=tuple)


def generate_licensing_report(
    engine: MatchingEngine,
    profile: Union[BusinessProfile, Mapping[str, Any]],
    *,
    config: Optional[OpenRouterConfig] = None,
    completion: Completion = chat_completion,
    use_ai: bool = True,
) -> ReportBundle:
    """Match the profile and produce a report, degrading to the templated one.

    Profile validation errors propagate. Any failure of the text-generation
    collaborator (missing key, HTTP error, malformed payload) is logged and
    replaced by the deterministic fallback report.
    """
    match_result = engine.find_applicable_requirements(profile)
    validated = match_result.business_profile
    recommendations = tuple(engine.get_business_recommendations(validated))

    report: Optional[LicensingReport] = None
    if use_ai:
        report = _try_ai_report(match_result, validated, recommendations, config=config, completion=completion)
    if report is None:
        report = build_fallback_report(match_result, validated, recommendations)

    return ReportBundle(report=report, requirements=match_result, recommendations=recommendations)


def _try_ai_report(
    match_result: MatchResult,
    profile: BusinessProfile,
    recommendations: tuple[Recommendation, ...],
    *,
    config: Optional[OpenRouterConfig],
    completion: Completion,
) -> Optional[LicensingReport]:
    try:
        cfg = config or get_openrouter_config()
        text = completion(cfg, build_report_messages(match_result, profile))
    except (OpenRouterHttpError, HTTPException, OSError, ValueError) as exc:
        logger.warning("Report generation unavailable, using fallback report: %s", exc)
        return None
    return report_from_ai_response(text, match_result, profile, recommendations)
