from __future__ import annotations

from typing import Iterable, Optional

from .models import BusinessProfile, Condition, NumericRange, RequirementRecord


def within_range(value: float, bounds: Optional[NumericRange]) -> bool:
    """Inclusive bounds check; a missing range or a missing bound is unconstrained."""
    if bounds is None:
        return True
    if bounds.minimum is not None and value < bounds.minimum:
        return False
    if bounds.maximum is not None and value > bounds.maximum:
        return False
    return True


def has_capabilities(profile: BusinessProfile, names: Iterable[str]) -> bool:
    capabilities = profile.capabilities()
    return all(capabilities.get(name, False) for name in names)


def condition_holds(profile: BusinessProfile, condition: Optional[Condition]) -> bool:
    if condition is None or condition.is_empty():
        return True

    if condition.business_type is not None and profile.business_type != condition.business_type:
        return False
    if not within_range(profile.seating_capacity, condition.seating_capacity):
        return False
    if not within_range(profile.floor_area, condition.floor_area):
        return False
    if condition.has_service and not has_capabilities(profile, condition.has_service):
        return False
    if (
        condition.applicable_business_types is not None
        and profile.business_type not in condition.applicable_business_types
    ):
        return False
    return True


def requirement_applies(profile: BusinessProfile, record: RequirementRecord) -> bool:
    # An empty applicable_business_types set leaves the record unrestricted.
    if record.applicable_business_types and profile.business_type not in record.applicable_business_types:
        return False
    return condition_holds(profile, record.conditions)
