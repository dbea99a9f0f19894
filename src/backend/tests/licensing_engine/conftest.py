import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.licensing_engine.catalog import RequirementCatalog


@pytest.fixture
def make_catalog():
    def _make(*, requirements, rules) -> RequirementCatalog:
        return RequirementCatalog.from_document(
            {
                "regulatoryRequirements": {"generalRequirements": [], **requirements},
                "businessLicensingMapping": {"rules": rules},
            }
        )

    return _make
