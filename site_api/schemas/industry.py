# site_api/schemas/industry.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _stringify_id(v: Any) -> Any:
    # asyncpg hands UUID columns back as uuid.UUID
    return str(v) if v is not None and not isinstance(v, str) else v


EntityId = Annotated[str, BeforeValidator(_stringify_id)]


class IndustrySummary(BaseModel):
    slug: str
    name: str
    tagline: str = ""


class RelatedIndustry(IndustrySummary):
    icon_name: str = ""


class IndustryCandidate(RelatedIndustry):
    """Projection used to build the classifier's candidate list."""

    id: EntityId


class IndustryVertical(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: EntityId
    slug: str
    name: str
    tagline: str = ""
    icon_name: str = ""
    hero_headline: str = ""
    hero_subhead: str = ""
    hero_image_url: Optional[str] = None
    results_statement: Optional[str] = None
    related_industries: List[str] = Field(default_factory=list)
    metadata_title: Optional[str] = None
    metadata_description: Optional[str] = None
    metadata_keywords: List[str] = Field(default_factory=list)
    display_order: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("related_industries", "metadata_keywords", mode="before")
    def _null_list(cls, v):
        return v if v is not None else []


class PainPointOut(BaseModel):
    id: EntityId
    title: str
    description: str
    display_order: int = 0


class UseCaseOut(BaseModel):
    id: EntityId
    title: str
    description: str
    benefit: Optional[str] = None
    icon_name: str = ""
    image_url: Optional[str] = None
    display_order: int = 0


class FAQOut(BaseModel):
    id: EntityId
    question: str
    answer: str
    display_order: int = 0


class IndustryDetail(IndustryVertical):
    pain_points: List[PainPointOut] = Field(default_factory=list)
    use_cases: List[UseCaseOut] = Field(default_factory=list)
    faqs: List[FAQOut] = Field(default_factory=list)
