from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel


class BusinessType(str, Enum):
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    FAST_FOOD = "fast_food"
    DELIVERY_ONLY = "delivery_only"
    CATERING = "catering"
    FOOD_TRUCK = "food_truck"
    BAR_PUB = "bar_pub"
    HOTEL_RESTAURANT = "hotel_restaurant"


class AuthorityCategory(str, Enum):
    GENERAL = "general"
    POLICE = "police"
    HEALTH = "health"
    FIRE = "fire"


class ComplexityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CamelModel(BaseModel):
    # Catalog documents and API payloads are camelCase; attributes stay snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BusinessProfile(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    business_type: BusinessType
    seating_capacity: int = Field(ge=0)
    floor_area: float = Field(gt=0, allow_inf_nan=False)
    services: Dict[str, bool] = Field(default_factory=dict)
    kitchen_features: Dict[str, bool] = Field(default_factory=dict)
    operational_hours: Dict[str, bool] = Field(default_factory=dict)

    @field_validator("services", "kitchen_features", "operational_hours", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def capabilities(self) -> Dict[str, bool]:
        """Flat view over services, kitchen features and operational hours.

        Flag names are unique across the three namespaces by convention, so
        the merge order does not change the result.
        """
        merged: Dict[str, bool] = {}
        for namespace in (self.operational_hours, self.kitchen_features, self.services):
            for name, enabled in namespace.items():
                merged[name] = merged.get(name, False) or bool(enabled)
        return merged

    def has_capability(self, name: str) -> bool:
        return self.capabilities().get(name, False)


class NumericRange(CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    minimum: Optional[float] = Field(default=None, alias="min")
    maximum: Optional[float] = Field(default=None, alias="max")


_FLAT_BOUNDS = (
    ("seatingCapacity", "minSeatingCapacity", "maxSeatingCapacity"),
    ("floorArea", "minFloorArea", "maxFloorArea"),
)


class Condition(CamelModel):
    """Structured predicate; every clause is optional and present clauses are ANDed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    business_type: Optional[BusinessType] = None
    seating_capacity: Optional[NumericRange] = None
    floor_area: Optional[NumericRange] = None
    has_service: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("hasService", "requiredServices", "has_service"),
    )
    applicable_business_types: Optional[Tuple[BusinessType, ...]] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_bounds(cls, data: Any) -> Any:
        # Requirement-level conditions in the catalog use minSeatingCapacity/maxFloorArea etc.
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for range_key, min_key, max_key in _FLAT_BOUNDS:
            lo = data.pop(min_key, None)
            hi = data.pop(max_key, None)
            if lo is None and hi is None:
                continue
            if data.get(range_key) is not None:
                raise ValueError(f"{range_key} given both as a range and as {min_key}/{max_key}")
            data[range_key] = {"min": lo, "max": hi}
        return data

    def is_empty(self) -> bool:
        return (
            self.business_type is None
            and self.seating_capacity is None
            and self.floor_area is None
            and not self.has_service
            and self.applicable_business_types is None
        )


class RequirementRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    requirement_id: str
    title: str
    description: str = ""
    authority: str = ""
    category: AuthorityCategory = AuthorityCategory.GENERAL
    mandatory: bool = False
    applicable_business_types: Tuple[BusinessType, ...] = ()
    conditions: Condition = Field(default_factory=Condition)

    @field_validator("category", mode="before")
    @classmethod
    def _unknown_category_is_general(cls, value: Any) -> Any:
        if isinstance(value, AuthorityCategory):
            return value
        try:
            return AuthorityCategory(value)
        except ValueError:
            return AuthorityCategory.GENERAL

    @field_validator("conditions", mode="before")
    @classmethod
    def _none_is_empty_condition(cls, value: Any) -> Any:
        return {} if value is None else value


class MappingRule(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rule_id: str
    condition: Condition = Field(default_factory=Condition)
    applicable_requirements: Tuple[str, ...] = ()


class DataIntegrityGap(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rule_id: str
    requirement_id: str


class MatchedRequirement(CamelModel):
    """A catalog record paired with the rule that first selected it.

    Serialized as one flat row: the record fields plus `matchedByRule`.
    """

    requirement: RequirementRecord
    matched_by_rule: str

    @model_validator(mode="before")
    @classmethod
    def _unflatten_row(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "requirement" in data:
            return data
        row = dict(data)
        rule = row.pop("matchedByRule", row.pop("matched_by_rule", None))
        return {"requirement": row, "matched_by_rule": rule}

    @model_serializer(mode="wrap")
    def _flat_row(self, handler) -> Dict[str, Any]:
        data = handler(self)
        row = dict(data.pop("requirement"))
        row.update(data)
        return row

    @property
    def requirement_id(self) -> str:
        return self.requirement.requirement_id

    @property
    def category(self) -> AuthorityCategory:
        return self.requirement.category

    @property
    def mandatory(self) -> bool:
        return self.requirement.mandatory


class MatchSummary(CamelModel):
    total_requirements: int
    mandatory_requirements: int
    optional_requirements: int
    authority_counts: Dict[AuthorityCategory, int] = Field(default_factory=dict)
    estimated_processing_time: str
    complexity_level: ComplexityLevel


class MatchResult(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    business_profile: BusinessProfile
    requirements: Dict[AuthorityCategory, List[MatchedRequirement]] = Field(default_factory=dict)
    summary: MatchSummary
    processed_at: datetime

    def all_requirements(self) -> List[MatchedRequirement]:
        out: List[MatchedRequirement] = []
        for category in AuthorityCategory:
            out.extend(self.requirements.get(category, []))
        return out


class Recommendation(CamelModel):
    type: str
    message: str
    priority: Priority


class DetailedRequirement(RequirementRecord):
    related_requirements: Tuple[RequirementRecord, ...] = ()
    processing_tips: Tuple[str, ...] = ()


class ReportSection(CamelModel):
    title: str
    content: str = ""
    priority: Priority = Priority.MEDIUM

    @field_validator("priority", mode="before")
    @classmethod
    def _lenient_priority(cls, value: Any) -> Any:
        # Generated reports sometimes echo the template literal "high|medium|low".
        if isinstance(value, str) and value.strip().lower() not in {p.value for p in Priority}:
            return Priority.MEDIUM
        return value.strip().lower() if isinstance(value, str) else value


class ReportMetadata(CamelModel):
    generated_at: datetime
    business_profile: BusinessProfile
    requirements_summary: MatchSummary
    generated_by: str


class LicensingReport(CamelModel):
    title: str
    summary: str = ""
    sections: List[ReportSection] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    total_estimated_cost: str = ""
    estimated_timeframe: str = ""
    metadata: Optional[ReportMetadata] = None
