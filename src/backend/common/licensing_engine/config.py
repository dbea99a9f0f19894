from __future__ import annotations

from pydantic import BaseModel, Field


class AdvisorThresholds(BaseModel):
    # Strictly-greater-than limits; a profile exactly at the limit gets no note.
    large_seating_capacity: int = 50
    large_floor_area: float = 200
    gas_floor_area: float = 100


class EngineConfig(BaseModel):
    """Tunable behavior of the matching engine.

    Build from a plain dict with `EngineConfig.model_validate(raw)`.
    """

    advisor: AdvisorThresholds = Field(default_factory=AdvisorThresholds)
    related_requirements_limit: int = Field(default=3, ge=0)
