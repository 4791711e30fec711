# site_api/schemas/match.py
from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from site_api.schemas.industry import IndustrySummary, IndustryVertical


class MatchIndustryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Left untyped so a missing or non-string value reaches the matcher's own
    # input check and is reported as invalid_input rather than a 422.
    business_description: Any = Field(default=None, alias="businessDescription")


class MatchIndustryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    matched_industry: IndustryVertical = Field(alias="matchedIndustry")
    confidence: Literal["high", "medium", "low"]
    reasoning: str
    alternate_industries: List[IndustrySummary] = Field(default_factory=list, alias="alternateIndustries")


class ErrorResponse(BaseModel):
    error: str
    code: str
