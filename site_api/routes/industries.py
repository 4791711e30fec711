# site_api/routes/industries.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from site_api.core.config import settings
from site_api.core.exceptions import NotFoundError
from site_api.core.logging import get_structlog_logger
from site_api.db.session import get_session
from site_api.schemas.industry import IndustryDetail, IndustryVertical, RelatedIndustry
from site_api.schemas.match import ErrorResponse, MatchIndustryRequest, MatchIndustryResponse
from site_api.services.classification_provider import get_classification_provider
from site_api.services.industry_catalog import IndustryCatalog
from site_api.services.industry_matcher import IndustryMatcher, MatcherConfig

router = APIRouter()

MAX_RELATED_SLUGS = 20


def get_catalog(session: AsyncSession = Depends(get_session)) -> IndustryCatalog:
    return IndustryCatalog(session)


def get_matcher_config() -> MatcherConfig:
    return MatcherConfig.from_settings(settings)


def get_industry_matcher(
    catalog: IndustryCatalog = Depends(get_catalog),
    provider=Depends(get_classification_provider),
    config: MatcherConfig = Depends(get_matcher_config),
) -> IndustryMatcher:
    return IndustryMatcher(catalog, provider, config)


@router.post(
    "/match-industry",
    response_model=MatchIndustryResponse,
    status_code=status.HTTP_200_OK,
    summary="Match a business description to an industry",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def match_industry(
    body: MatchIndustryRequest,
    matcher: IndustryMatcher = Depends(get_industry_matcher),
) -> MatchIndustryResponse:
    logger = get_structlog_logger(__name__).bind(route="/api/match-industry", action="match")

    result = await matcher.match(body.business_description)
    logger.info(
        "match_industry.completed",
        slug=result.matched_industry.slug,
        confidence=result.confidence,
    )

    return MatchIndustryResponse(
        matched_industry=result.matched_industry,
        confidence=result.confidence,
        reasoning=result.reasoning,
        alternate_industries=result.alternate_industries,
    )


@router.get(
    "/industries",
    response_model=List[IndustryVertical],
    summary="List active industries",
)
async def list_industries(catalog: IndustryCatalog = Depends(get_catalog)) -> List[IndustryVertical]:
    return await catalog.list_active_industries()


@router.get(
    "/industries/related",
    response_model=List[RelatedIndustry],
    summary="Look up active industries by slug",
)
async def related_industries(
    slugs: Optional[str] = Query(default=None, description="Comma-separated industry slugs"),
    catalog: IndustryCatalog = Depends(get_catalog),
) -> List[RelatedIndustry]:
    requested: List[str] = []
    for slug in (slugs or "").split(","):
        slug = slug.strip()
        if slug and slug not in requested:
            requested.append(slug)
    return await catalog.get_related_industries(requested[:MAX_RELATED_SLUGS])


@router.get(
    "/industries/{slug}",
    response_model=IndustryDetail,
    summary="Get an active industry with its landing-page content",
    responses={404: {"model": ErrorResponse}},
)
async def get_industry(slug: str, catalog: IndustryCatalog = Depends(get_catalog)) -> IndustryDetail:
    industry = await catalog.get_industry_details(slug)
    if industry is None:
        raise NotFoundError("Industry not found", details={"slug": slug})
    return industry
