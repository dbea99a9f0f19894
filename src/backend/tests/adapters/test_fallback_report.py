from adapters.report.fallback import (
    CONSULTANT_TIP,
    ESTIMATED_COST_PLACEHOLDER,
    GENERAL_TIPS,
    GENERATED_BY,
    authorities_covered,
    build_fallback_report,
    business_type_name,
)
from common.licensing_engine.models import BusinessType, Priority


def test_fallback_report_for_small_cafe(engine, small_cafe_payload):
    result = engine.find_applicable_requirements(small_cafe_payload)
    report = build_fallback_report(result)

    assert report.title == "דוח דרישות רישוי עבור בית קפה"
    assert "נמצאו 4 דרישות רישוי" in report.summary
    assert "מ-2 רשויות" in report.summary
    assert [s.title for s in report.sections] == ["סיכום הדרישות", "דרישות לפי רשות", "דרישות חובה"]
    assert all(s.priority == Priority.HIGH for s in report.sections)
    assert report.recommendations == list(GENERAL_TIPS)
    assert report.total_estimated_cost == ESTIMATED_COST_PLACEHOLDER
    assert report.estimated_timeframe == "2-4 weeks"


def test_fallback_metadata_reflects_match(engine, small_cafe_payload):
    result = engine.find_applicable_requirements(small_cafe_payload)
    report = build_fallback_report(result)

    assert report.metadata.generated_by == GENERATED_BY
    assert report.metadata.generated_at == result.processed_at
    assert report.metadata.requirements_summary == result.summary
    assert report.metadata.business_profile == result.business_profile


def test_large_match_adds_consultant_tip_and_profile_notes(engine, large_restaurant_payload):
    result = engine.find_applicable_requirements(large_restaurant_payload)
    recommendations = engine.get_business_recommendations(result.business_profile)
    report = build_fallback_report(result, recommendations=recommendations)

    assert report.recommendations[0] == recommendations[0].message
    assert report.recommendations[-1] == CONSULTANT_TIP
    assert len(report.recommendations) == len(recommendations) + len(GENERAL_TIPS) + 1
    assert report.estimated_timeframe == "8-12 weeks"


def test_sections_list_requirements(engine, large_restaurant_payload):
    result = engine.find_applicable_requirements(large_restaurant_payload)
    by_authority, mandatory = build_fallback_report(result).sections[1:]

    for authority in authorities_covered(result):
        assert f"### {authority}" in by_authority.content
    gen_003 = next(r.requirement for r in result.all_requirements() if r.requirement_id == "GEN-003")
    assert gen_003.title in by_authority.content
    assert gen_003.title not in mandatory.content
    assert mandatory.content.count("**") // 2 == result.summary.mandatory_requirements


def test_authorities_are_distinct_and_ordered(engine, large_restaurant_payload):
    result = engine.find_applicable_requirements(large_restaurant_payload)
    assert authorities_covered(result) == [
        "רשות מקומית",
        "משטרת ישראל",
        "משרד הבריאות",
        "מכבי האש וההצלה הארצי",
    ]


def test_empty_match_still_builds_report(engine):
    result = engine.find_applicable_requirements(
        {"businessType": "hotel_restaurant", "seatingCapacity": 80, "floorArea": 300}
    )
    report = build_fallback_report(result)
    assert "נמצאו 0 דרישות" in report.summary
    assert report.estimated_timeframe == "1-2 weeks"


def test_every_business_type_has_a_display_name():
    for business_type in BusinessType:
        assert business_type_name(business_type) != business_type.value
