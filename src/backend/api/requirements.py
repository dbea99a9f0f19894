from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from adapters.report.fallback import business_type_name
from common.licensing_engine.engine import MatchingEngine
from common.licensing_engine.errors import ValidationError
from common.licensing_engine.models import BusinessType
from pipelines.report import generate_licensing_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["requirements"])

REQUIREMENT_ID_PATTERN = re.compile(r"^[A-Z]+-\d{3}$")

# (description, typical seating, typical floor area in m²)
BUSINESS_TYPE_INFO: dict[BusinessType, tuple[str, str, str]] = {
    BusinessType.RESTAURANT: ("מסעדה עם שירות מלא", "20-100", "80-300"),
    BusinessType.CAFE: ("בית קפה עם מזון קל", "10-40", "30-100"),
    BusinessType.FAST_FOOD: ("מזון מהיר ושירות עצמי", "15-50", "40-150"),
    BusinessType.DELIVERY_ONLY: ("עסק משלוחים ללא ישיבה", "0-5", "20-80"),
    BusinessType.CATERING: ("שירותי קייטרינג ואירועים", "0-20", "50-200"),
    BusinessType.FOOD_TRUCK: ("משאית או דוכן מזון נייד", "0-10", "10-30"),
    BusinessType.BAR_PUB: ("בר או פאב עם אלכוהול", "20-80", "60-200"),
    BusinessType.HOTEL_RESTAURANT: ("מסעדה הפועלת במסגרת בית מלון", "30-150", "100-400"),
}


def get_engine(request: Request) -> MatchingEngine:
    return request.app.state.engine


def envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data, "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/info")
def api_info():
    return {
        "name": "Business Licensing Requirements API",
        "version": "1.0.0",
        "description": "API for Israeli business licensing requirements matching",
        "endpoints": {
            "POST /api/requirements/match": "Get applicable requirements for business profile",
            "GET /api/requirements/{requirementId}": "Get detailed requirement information",
            "GET /api/requirements": "List all requirements in the catalog",
            "POST /api/generate-report": "Generate user-friendly report from requirements",
            "GET /api/business-types": "Get available business types",
            "GET /health": "Health check",
        },
    }


@router.get("/business-types")
def list_business_types():
    data = []
    for business_type, (description, seating, area) in BUSINESS_TYPE_INFO.items():
        data.append(
            {
                "id": business_type.value,
                "name": business_type_name(business_type),
                "description": description,
                "typicalSeating": seating,
                "typicalArea": area,
            }
        )
    return envelope(data)


@router.post("/requirements/match")
def match_requirements(
    profile: Any = Body(...),
    engine: MatchingEngine = Depends(get_engine),
):
    # Non-object bodies reach the engine so they fail with the same field-named 400.
    result = engine.find_applicable_requirements(profile)
    recommendations = engine.get_business_recommendations(result.business_profile)
    logger.info(
        "Found %d applicable requirements: type=%s seats=%s area=%s",
        result.summary.total_requirements,
        result.business_profile.business_type.value,
        result.business_profile.seating_capacity,
        result.business_profile.floor_area,
    )

    data = result.model_dump(mode="json", by_alias=True)
    data["recommendations"] = [rec.model_dump(mode="json", by_alias=True) for rec in recommendations]
    return envelope(data)


@router.post("/generate-report")
def generate_report(
    profile: Any = Body(...),
    engine: MatchingEngine = Depends(get_engine),
):
    bundle = generate_licensing_report(engine, profile)
    raw = bundle.requirements.model_dump(mode="json", by_alias=True)
    raw["recommendations"] = [rec.model_dump(mode="json", by_alias=True) for rec in bundle.recommendations]
    return envelope(
        {
            "report": bundle.report.model_dump(mode="json", by_alias=True),
            "rawRequirements": raw,
        }
    )


@router.get("/requirements/{requirement_id}")
def get_requirement(requirement_id: str, engine: MatchingEngine = Depends(get_engine)):
    if not REQUIREMENT_ID_PATTERN.match(requirement_id):
        raise ValidationError(
            "requirementId",
            "Requirement ID must follow pattern: XXX-000 (e.g., GEN-001)",
        )
    details = engine.get_requirement_details(requirement_id)
    return envelope(details.model_dump(mode="json", by_alias=True))


@router.get("/requirements")
def list_requirements(engine: MatchingEngine = Depends(get_engine)):
    records = engine.get_all_requirements()
    return envelope(
        {
            "total": len(records),
            "requirements": [
                {
                    "requirementId": record.requirement_id,
                    "title": record.title,
                    "authority": record.authority,
                    "category": record.category.value,
                    "mandatory": record.mandatory,
                }
                for record in records
            ],
        }
    )
