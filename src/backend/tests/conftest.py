import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work,
# even when pytest's rootdir is the repository root (pyproject.toml).
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.licensing_engine.catalog import DEFAULT_CATALOG_PATH, RequirementCatalog
from common.licensing_engine.engine import MatchingEngine
from common.licensing_engine.models import BusinessProfile


@pytest.fixture(scope="session")
def catalog() -> RequirementCatalog:
    return RequirementCatalog.from_path(DEFAULT_CATALOG_PATH)


@pytest.fixture
def engine(catalog) -> MatchingEngine:
    return MatchingEngine(catalog)


@pytest.fixture
def make_profile():
    def _make(
        *,
        business_type: str = "restaurant",
        seating_capacity: int = 20,
        floor_area: float = 80,
        services=None,
        kitchen_features=None,
        operational_hours=None,
    ) -> BusinessProfile:
        return BusinessProfile(
            business_type=business_type,
            seating_capacity=seating_capacity,
            floor_area=floor_area,
            services=services or {},
            kitchen_features=kitchen_features or {},
            operational_hours=operational_hours or {},
        )

    return _make


@pytest.fixture
def small_cafe_payload() -> dict:
    return {
        "businessType": "cafe",
        "seatingCapacity": 12,
        "floorArea": 40,
        "services": {},
        "kitchenFeatures": {},
        "operationalHours": {},
    }


@pytest.fixture
def large_restaurant_payload() -> dict:
    return {
        "businessType": "restaurant",
        "seatingCapacity": 45,
        "floorArea": 150,
        "services": {"alcoholService": True},
        "kitchenFeatures": {"gasUsage": True, "meatHandling": True},
        "operationalHours": {"lateNightOperation": True},
    }
