import pytest

from common.licensing_engine.errors import ValidationError
from common.licensing_engine.models import BusinessProfile, BusinessType
from common.licensing_engine.validation import validate_business_profile


def _payload(**overrides):
    base = {"businessType": "cafe", "seatingCapacity": 12, "floorArea": 40}
    base.update(overrides)
    return {k: v for k, v in base.items() if v is not ...}


@pytest.mark.parametrize("field", ["businessType", "seatingCapacity", "floorArea"])
def test_missing_required_field_is_named(field):
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(**{field: ...}))
    assert exc.value.field == field
    assert field in str(exc.value)


@pytest.mark.parametrize("field", ["businessType", "seatingCapacity", "floorArea"])
def test_null_required_field_counts_as_missing(field):
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(**{field: None}))
    assert exc.value.field == field


def test_unknown_business_type_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(businessType="nightclub"))
    assert exc.value.field == "businessType"
    assert "nightclub" in str(exc.value)


def test_negative_seating_capacity_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(seatingCapacity=-1))
    assert exc.value.field == "seatingCapacity"


@pytest.mark.parametrize("area", [0, -10, float("nan")])
def test_non_positive_floor_area_is_rejected(area):
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(floorArea=area))
    assert exc.value.field == "floorArea"


@pytest.mark.parametrize("value", ["12", True])
def test_non_numeric_seating_capacity_is_rejected(value):
    with pytest.raises(ValidationError) as exc:
        validate_business_profile(_payload(seatingCapacity=value))
    assert exc.value.field == "seatingCapacity"


def test_zero_seating_is_valid():
    profile = validate_business_profile(_payload(businessType="delivery_only", seatingCapacity=0))
    assert profile.seating_capacity == 0
    assert profile.business_type == BusinessType.DELIVERY_ONLY


def test_snake_case_keys_and_missing_namespaces_are_accepted():
    profile = validate_business_profile(
        {"business_type": "restaurant", "seating_capacity": 30, "floor_area": 90.5, "services": None}
    )
    assert profile.floor_area == 90.5
    assert profile.services == {}
    assert profile.capabilities() == {}


def test_unknown_keys_are_dropped_from_echo():
    profile = validate_business_profile(_payload(ownerName="Dana", services={"takeaway": True}))
    dumped = profile.model_dump(by_alias=True)
    assert "ownerName" not in dumped
    assert dumped["services"] == {"takeaway": True}


def test_built_profile_passes_through():
    profile = BusinessProfile(business_type="cafe", seating_capacity=5, floor_area=30)
    assert validate_business_profile(profile) is profile


def test_non_mapping_is_rejected():
    with pytest.raises(ValidationError):
        validate_business_profile(["cafe", 12, 40])
