from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from .catalog import RequirementCatalog
from .conditions import condition_holds, requirement_applies
from .config import EngineConfig
from .details import build_detailed_requirement
from .errors import NotFoundError
from .models import (
    BusinessProfile,
    DataIntegrityGap,
    DetailedRequirement,
    MatchedRequirement,
    MatchResult,
    Recommendation,
    RequirementRecord,
)
from .recommendations import get_business_recommendations
from .summary import build_summary, group_by_authority
from .validation import validate_business_profile

logger = logging.getLogger(__name__)

ProfileInput = Union[BusinessProfile, Mapping[str, Any]]


class MatchingEngine:
    """Matches business profiles against an injected, read-only catalog.

    Holds no per-request state, so one instance can serve concurrent callers.
    """

    def __init__(self, catalog: RequirementCatalog, *, config: Optional[EngineConfig] = None):
        self._catalog = catalog
        self._config = config or EngineConfig()

    @property
    def catalog(self) -> RequirementCatalog:
        return self._catalog

    def find_applicable_requirements(self, profile: ProfileInput) -> MatchResult:
        validated = validate_business_profile(profile)

        collected = self._resolve_rules(validated)
        applicable = [m for m in collected if requirement_applies(validated, m.requirement)]

        summary = build_summary(applicable)
        logger.debug(
            "Matched %d requirements for business type %s (%d rule-selected before filtering)",
            summary.total_requirements,
            validated.business_type.value,
            len(collected),
        )
        return MatchResult(
            business_profile=validated,
            requirements=group_by_authority(applicable),
            summary=summary,
            processed_at=datetime.now(timezone.utc),
        )

    def _resolve_rules(self, profile: BusinessProfile) -> List[MatchedRequirement]:
        # Dict preserves discovery order; the first rule to reach an id keeps provenance.
        collected: Dict[str, MatchedRequirement] = {}
        for rule in self._catalog.rules:
            if not condition_holds(profile, rule.condition):
                continue
            for requirement_id in rule.applicable_requirements:
                if requirement_id in collected:
                    continue
                record = self._catalog.get(requirement_id)
                if record is None:
                    gap = DataIntegrityGap(rule_id=rule.rule_id, requirement_id=requirement_id)
                    logger.warning(
                        "Skipping requirement %s referenced by rule %s: not in catalog",
                        gap.requirement_id,
                        gap.rule_id,
                    )
                    continue
                collected[requirement_id] = MatchedRequirement(requirement=record, matched_by_rule=rule.rule_id)
        return list(collected.values())

    def get_business_recommendations(self, profile: ProfileInput) -> List[Recommendation]:
        return get_business_recommendations(validate_business_profile(profile), self._config.advisor)

    def get_requirement_details(self, requirement_id: str) -> DetailedRequirement:
        record = self._catalog.get(requirement_id)
        if record is None:
            raise NotFoundError(requirement_id)
        return build_detailed_requirement(
            record,
            self._catalog.requirements,
            limit=self._config.related_requirements_limit,
        )

    def get_all_requirements(self) -> List[RequirementRecord]:
        return list(self._catalog.requirements)
