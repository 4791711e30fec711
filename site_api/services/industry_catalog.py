# site_api/services/industry_catalog.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from site_api.core.exceptions import CatalogUnavailableError
from site_api.core.logging import get_structlog_logger
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

logger = get_structlog_logger(__name__)


_SQL_ACTIVE_CANDIDATES = text(
    """
    SELECT id, slug, name, tagline, icon_name
    FROM smb_industries
    WHERE is_active = TRUE
"""
)

_SQL_BY_SLUG = text(
    """
    SELECT *
    FROM smb_industries
    WHERE slug = :slug
    LIMIT 1
"""
)

_SQL_SUMMARIES_BY_SLUGS = text(
    """
    SELECT slug, name, tagline
    FROM smb_industries
    WHERE is_active = TRUE
      AND slug IN :slugs
"""
).bindparams(bindparam("slugs", expanding=True))

_SQL_ACTIVE_ORDERED = text(
    """
    SELECT *
    FROM smb_industries
    WHERE is_active = TRUE
    ORDER BY display_order ASC, name ASC
"""
)

_SQL_ACTIVE_BY_SLUG = text(
    """
    SELECT *
    FROM smb_industries
    WHERE slug = :slug
      AND is_active = TRUE
    LIMIT 1
"""
)

_SQL_RELATED_BY_SLUGS = text(
    """
    SELECT slug, name, tagline, icon_name
    FROM smb_industries
    WHERE is_active = TRUE
      AND slug IN :slugs
"""
).bindparams(bindparam("slugs", expanding=True))

_SQL_PAIN_POINTS = text(
    """
    SELECT id, title, description, display_order
    FROM smb_pain_points
    WHERE industry_id = :industry_id
    ORDER BY display_order ASC
"""
)

_SQL_USE_CASES = text(
    """
    SELECT id, title, description, benefit, icon_name, image_url, display_order
    FROM smb_use_cases
    WHERE industry_id = :industry_id
    ORDER BY display_order ASC
"""
)

_SQL_FAQS = text(
    """
    SELECT id, question, answer, display_order
    FROM smb_faqs
    WHERE industry_id = :industry_id
    ORDER BY display_order ASC
"""
)


def order_by_slugs(rows: Sequence[Any], slugs: Sequence[str]) -> List[Any]:
    """Return ``rows`` in the order their ``slug`` appears in ``slugs``."""
    by_slug = {row.slug: row for row in rows}
    return [by_slug[slug] for slug in slugs if slug in by_slug]


class IndustryCatalog:
    """Read access to the industry verticals held in the system of record.

    Every query failure surfaces as :class:`CatalogUnavailableError`; empty
    results are returned as-is and judged by the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_all(self, stmt: Any, params: Optional[Dict[str, Any]] = None) -> List[Mapping[str, Any]]:
        try:
            res = await self._session.execute(stmt, params or {})
            return list(res.mappings().all())
        except SQLAlchemyError as e:
            logger.error("catalog.query_failed", error=str(e))
            raise CatalogUnavailableError(details={"error": str(e)}) from e

    async def _fetch_one(self, stmt: Any, params: Dict[str, Any]) -> Optional[Mapping[str, Any]]:
        try:
            res = await self._session.execute(stmt, params)
            return res.mappings().first()
        except SQLAlchemyError as e:
            logger.error("catalog.query_failed", error=str(e), params=params)
            raise CatalogUnavailableError(details={"error": str(e)}) from e

    async def list_active_verticals(self) -> List[IndustryCandidate]:
        rows = await self._fetch_all(_SQL_ACTIVE_CANDIDATES)
        return [IndustryCandidate.model_validate(dict(row)) for row in rows]

    async def get_vertical_by_slug(self, slug: str) -> Optional[IndustryVertical]:
        row = await self._fetch_one(_SQL_BY_SLUG, {"slug": slug})
        if row is None:
            return None
        return IndustryVertical.model_validate(dict(row))

    async def get_verticals_by_slugs(self, slugs: Sequence[str]) -> List[IndustrySummary]:
        if not slugs:
            return []
        rows = await self._fetch_all(_SQL_SUMMARIES_BY_SLUGS, {"slugs": list(slugs)})
        summaries = [IndustrySummary.model_validate(dict(row)) for row in rows]
        return order_by_slugs(summaries, slugs)

    async def list_active_industries(self) -> List[IndustryVertical]:
        rows = await self._fetch_all(_SQL_ACTIVE_ORDERED)
        return [IndustryVertical.model_validate(dict(row)) for row in rows]

    async def get_industry_details(self, slug: str) -> Optional[IndustryDetail]:
        row = await self._fetch_one(_SQL_ACTIVE_BY_SLUG, {"slug": slug})
        if row is None:
            return None

        industry = IndustryVertical.model_validate(dict(row))
        params = {"industry_id": row["id"]}
        pain_points = await self._fetch_all(_SQL_PAIN_POINTS, params)
        use_cases = await self._fetch_all(_SQL_USE_CASES, params)
        faqs = await self._fetch_all(_SQL_FAQS, params)

        return IndustryDetail(
            **industry.model_dump(),
            pain_points=[PainPointOut.model_validate(dict(r)) for r in pain_points],
            use_cases=[UseCaseOut.model_validate(dict(r)) for r in use_cases],
            faqs=[FAQOut.model_validate(dict(r)) for r in faqs],
        )

    async def get_related_industries(self, slugs: Sequence[str]) -> List[RelatedIndustry]:
        if not slugs:
            return []
        rows = await self._fetch_all(_SQL_RELATED_BY_SLUGS, {"slugs": list(slugs)})
        related = [RelatedIndustry.model_validate(dict(row)) for row in rows]
        return order_by_slugs(related, slugs)
