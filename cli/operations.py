# cli/operations.py
"""
Operator tasks behind the CLI commands.
All functions return an OperationResult: (success: bool, message: str, data: dict)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError

from site_api.core.config import settings
from site_api.core.exceptions import BaseAPIException
from site_api.db.base import Base
from site_api.db.session import create_database_engine, transaction_session
from site_api.models.industry import Industry
from site_api.services.classification_provider import (
    close_classification_provider,
    get_classification_provider,
)
from site_api.services.industry_catalog import IndustryCatalog
from site_api.services.industry_matcher import IndustryMatcher, MatcherConfig

from cli.seed_data import DEFAULT_INDUSTRIES


@dataclass
class OperationResult:
    """Structured result from operator tasks."""
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


async def create_tables() -> OperationResult:
    engine = create_database_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        return OperationResult(False, f"Failed to create tables: {e}")
    return OperationResult(True, "Tables created", {"tables": sorted(Base.metadata.tables)})


async def seed_industries(industries: Optional[List[Dict[str, Any]]] = None) -> OperationResult:
    """Insert the default catalogue; rows whose slug already exists are left alone."""
    rows = industries if industries is not None else DEFAULT_INDUSTRIES
    if not any(row["slug"] == settings.matcher_fallback_slug for row in rows):
        return OperationResult(
            False,
            f"Seed data must include the fallback industry '{settings.matcher_fallback_slug}'",
        )

    stmt = insert(Industry).values(rows).on_conflict_do_nothing(index_elements=["slug"])
    try:
        async with transaction_session() as session:
            result = await session.execute(stmt)
    except BaseAPIException as e:
        return OperationResult(False, e.message, e.details)
    return OperationResult(True, "Industries seeded", {"inserted": result.rowcount, "total": len(rows)})


async def list_industries() -> OperationResult:
    try:
        async with transaction_session() as session:
            industries = await IndustryCatalog(session).list_active_industries()
    except BaseAPIException as e:
        return OperationResult(False, e.message, e.details)
    return OperationResult(
        True,
        f"{len(industries)} active industries",
        {"industries": [(i.slug, i.name, i.tagline) for i in industries]},
    )


async def match_description(description: str) -> OperationResult:
    """Run the matcher against the configured database and provider."""
    try:
        async with transaction_session() as session:
            matcher = IndustryMatcher(
                IndustryCatalog(session),
                get_classification_provider(),
                MatcherConfig.from_settings(settings),
            )
            result = await matcher.match(description)
    except BaseAPIException as e:
        return OperationResult(False, e.message, {"code": e.code, **e.details})
    finally:
        await close_classification_provider()

    return OperationResult(
        True,
        f"Matched {result.matched_industry.name} ({result.confidence} confidence)",
        {
            "slug": result.matched_industry.slug,
            "reasoning": result.reasoning,
            "alternates": [a.slug for a in result.alternate_industries],
        },
    )


async def check_api_health(api_url: str = "http://localhost:8000") -> OperationResult:
    """GET the health endpoint of a running API."""
    url = f"{api_url.rstrip('/')}{settings.api_prefix}/health"
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        return OperationResult(False, f"API not reachable at {url}: {e}")

    if response.status_code != 200:
        return OperationResult(False, f"Health check returned HTTP {response.status_code}")

    body = response.json()
    return OperationResult(
        body.get("status") == "healthy",
        f"API status: {body.get('status', 'unknown')}",
        {"checks": body.get("checks", {})},
    )
