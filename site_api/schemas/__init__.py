# site_api/schemas/__init__.py
"""
Pydantic schemas for request/response validation and serialization.
"""

from site_api.schemas.industry import (
    FAQOut,
    IndustryCandidate,
    IndustryDetail,
    IndustrySummary,
    IndustryVertical,
    PainPointOut,
    RelatedIndustry,
    UseCaseOut,
)
from site_api.schemas.match import ErrorResponse, MatchIndustryRequest, MatchIndustryResponse

__all__ = [
    "ErrorResponse",
    "FAQOut",
    "IndustryCandidate",
    "IndustryDetail",
    "IndustrySummary",
    "IndustryVertical",
    "MatchIndustryRequest",
    "MatchIndustryResponse",
    "PainPointOut",
    "RelatedIndustry",
    "UseCaseOut",
]
