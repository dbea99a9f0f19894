"""Business licensing requirements matching engine.

This package contains only domain logic:
- Inputs are a business profile and an injected, read-only requirements catalog.
- No HTTP, report generation, or network calls live here.
"""

from .catalog import RequirementCatalog, find_integrity_gaps, load_catalog
from .config import AdvisorThresholds, EngineConfig
from .engine import MatchingEngine
from .errors import CatalogError, LicensingError, NotFoundError, ValidationError
from .models import (
    AuthorityCategory,
    BusinessProfile,
    BusinessType,
    ComplexityLevel,
    Condition,
    DataIntegrityGap,
    DetailedRequirement,
    MappingRule,
    MatchedRequirement,
    MatchResult,
    MatchSummary,
    Recommendation,
    RequirementRecord,
)
