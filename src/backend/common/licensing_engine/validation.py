from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ValidationError
from .models import BusinessProfile, BusinessType

REQUIRED_FIELDS = (
    ("businessType", "business_type"),
    ("seatingCapacity", "seating_capacity"),
    ("floorArea", "floor_area"),
)

_FIELD_MESSAGES = {
    "seatingCapacity": "Seating capacity must be a non-negative number",
    "floorArea": "Floor area must be a positive number",
}

_BUSINESS_TYPES = frozenset(t.value for t in BusinessType)


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc]
    if not parts:
        return "businessProfile"
    if "_" in parts[0]:
        parts[0] = to_camel(parts[0])
    return ".".join(parts)


def validate_business_profile(profile: Union[BusinessProfile, Mapping[str, Any]]) -> BusinessProfile:
    """Return a validated BusinessProfile or raise ValidationError naming the field.

    Accepts an already-built BusinessProfile or a raw mapping keyed in camelCase
    (wire format) or snake_case.
    """
    if isinstance(profile, BusinessProfile):
        return profile
    if not isinstance(profile, Mapping):
        raise ValidationError("businessProfile", "Business profile must be an object")

    for alias, name in REQUIRED_FIELDS:
        value = profile.get(alias, profile.get(name))
        if value is None:
            raise ValidationError(alias, f"Missing required field: {alias}")

    business_type = profile.get("businessType", profile.get("business_type"))
    if not isinstance(business_type, BusinessType) and (
        not isinstance(business_type, str) or business_type not in _BUSINESS_TYPES
    ):
        raise ValidationError("businessType", f"Invalid business type: {business_type}")

    for alias, name in REQUIRED_FIELDS[1:]:
        value = profile.get(alias, profile.get(name))
        # bool is an int subclass; a checkbox value is not a measurement.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(alias, _FIELD_MESSAGES[alias])

    try:
        return BusinessProfile.model_validate(dict(profile))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = _field_name(first.get("loc", ()))
        raise ValidationError(field, _FIELD_MESSAGES.get(field, f"{field}: {first.get('msg', 'invalid value')}")) from exc
