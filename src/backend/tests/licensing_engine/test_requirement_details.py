import pytest

from common.licensing_engine.config import EngineConfig
from common.licensing_engine.details import FIRE_AUTHORITY, PROCESSING_TIPS
from common.licensing_engine.engine import MatchingEngine
from common.licensing_engine.errors import NotFoundError


def test_unknown_requirement_raises_not_found(engine):
    with pytest.raises(NotFoundError) as exc:
        engine.get_requirement_details("ZZZ-999")
    assert exc.value.requirement_id == "ZZZ-999"


def test_details_include_base_record_fields(engine, catalog):
    details = engine.get_requirement_details("FIRE-002")
    base = catalog.get("FIRE-002")
    assert details.requirement_id == base.requirement_id
    assert details.title == base.title
    assert details.conditions == base.conditions
    assert details.mandatory is True


def test_related_requirements_share_authority_and_exclude_self(engine):
    details = engine.get_requirement_details("MOH-002")
    related_ids = [r.requirement_id for r in details.related_requirements]
    assert related_ids == ["MOH-001", "MOH-003", "MOH-004"]


def test_related_requirements_are_capped(catalog):
    engine = MatchingEngine(catalog, config=EngineConfig(related_requirements_limit=1))
    details = engine.get_requirement_details("POL-003")
    assert [r.requirement_id for r in details.related_requirements] == ["POL-001"]


def test_processing_tips_follow_authority(engine):
    fire = engine.get_requirement_details("FIRE-001")
    assert list(fire.processing_tips) == list(PROCESSING_TIPS[FIRE_AUTHORITY])


def test_local_authority_has_no_tips(engine):
    assert engine.get_requirement_details("GEN-001").processing_tips == ()


def test_details_do_not_touch_catalog(engine, catalog):
    before = catalog.get("GEN-001").model_dump()
    engine.get_requirement_details("GEN-001")
    assert catalog.get("GEN-001").model_dump() == before
    assert not hasattr(catalog.get("GEN-001"), "related_requirements")
