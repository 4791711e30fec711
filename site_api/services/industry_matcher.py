# site_api/services/industry_matcher.py
"""
Free-text business description -> industry vertical.

The classification provider's answer is treated as untrusted input: it is
parsed into a tagged result, checked against the active verticals loaded for
the same request, and repaired with the fallback vertical when it names an
unknown slug. Everything else that goes wrong ends the request with a typed
error from ``site_api.core.exceptions``.
"""
from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Set, Tuple, Union

from site_api.core.config import Settings
from site_api.core.exceptions import (
    CatalogUnavailableError,
    InvalidInputError,
    NotConfiguredError,
    ProviderContractViolationError,
    ProviderUnavailableError,
)
from site_api.core.logging import get_structlog_logger
from site_api.schemas.industry import IndustryCandidate, IndustrySummary, IndustryVertical
from site_api.services.industry_catalog import order_by_slugs

logger = get_structlog_logger(__name__)

CONFIDENCE_LEVELS = ("high", "medium", "low")
MAX_ALTERNATES = 3

FALLBACK_REASONING = "Based on your description, we think professional services might be a good fit."
DEFAULT_REASONING = "Based on your description, this looks like the closest fit for your business."


@dataclass(frozen=True)
class MatcherConfig:
    api_key: Optional[str]
    fallback_slug: str = "professional-services"
    timeout_seconds: float = 20.0
    max_description_length: int = 2000
    company_name: str = "JOURN3Y"
    region: str = "Australian"

    @classmethod
    def from_settings(cls, settings: Settings) -> "MatcherConfig":
        return cls(
            api_key=settings.anthropic_api_key,
            fallback_slug=settings.matcher_fallback_slug,
            timeout_seconds=settings.matcher_timeout_seconds,
            max_description_length=settings.matcher_max_description_length,
            company_name=settings.matcher_company_name,
            region=settings.matcher_region,
        )


@dataclass(frozen=True)
class ParsedClassification:
    matched_slug: Any
    confidence: Any
    reasoning: Any
    alternate_slugs: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class InvalidClassification:
    reason: str


@dataclass(frozen=True)
class ClassificationResult:
    matched_industry: IndustryVertical
    confidence: str
    reasoning: str
    alternate_industries: List[IndustrySummary] = field(default_factory=list)


def validate_description(description: Any, max_length: int) -> str:
    if not isinstance(description, str) or not description.strip():
        raise InvalidInputError()
    if len(description) > max_length:
        raise InvalidInputError(
            f"Business description must be {max_length} characters or fewer",
            details={"length": len(description)},
        )
    return description


def build_classification_prompt(
    description: str,
    candidates: Sequence[IndustryCandidate],
    config: MatcherConfig,
) -> str:
    industry_list = "\n".join(f"- {c.slug}: {c.name} - {c.tagline}" for c in candidates)
    fallback = config.fallback_slug
    return (
        f"You are a business industry classifier for {config.company_name}, "
        f"an AI consulting company for {config.region} small businesses.\n\n"
        "Match this business description to the most appropriate industry:\n\n"
        f'"{description}"\n\n'
        "Available industries:\n"
        f"{industry_list}\n\n"
        "Rules:\n"
        "- Always return a match, even if confidence is low\n"
        "- If the business spans multiple industries, choose the PRIMARY revenue source\n"
        f"- Service businesses with no obvious industry (cleaning, gardening, mobile services) -> {fallback}\n"
        f"- If truly unsure, default to {fallback}\n\n"
        "Return ONLY a single valid JSON object with exactly these four fields "
        "(no markdown, no code fences, no explanation):\n"
        "{\n"
        '  "matchedIndustry": "slug",\n'
        '  "confidence": "high|medium|low",\n'
        '  "reasoning": "One sentence explanation shown to user",\n'
        '  "alternateIndustries": ["slug1", "slug2"]\n'
        "}"
    )


def parse_classification(raw: str) -> Union[ParsedClassification, InvalidClassification]:
    """Strictly parse the provider's text. No fence stripping, no extraction."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        return InvalidClassification(reason=f"invalid_json: {e}")

    if not isinstance(data, dict):
        return InvalidClassification(reason=f"expected_object: got {type(data).__name__}")

    alternates = data.get("alternateIndustries")
    return ParsedClassification(
        matched_slug=data.get("matchedIndustry"),
        confidence=data.get("confidence"),
        reasoning=data.get("reasoning"),
        alternate_slugs=tuple(alternates) if isinstance(alternates, list) else (),
    )


def apply_fallback_policy(
    parsed: ParsedClassification,
    active_slugs: Set[str],
    fallback_slug: str,
) -> Tuple[ParsedClassification, bool]:
    """Replace an unknown match with the fallback vertical.

    Returns the (possibly repaired) classification and whether the fallback
    was applied. A repaired result always has ``low`` confidence and the
    fixed fallback sentence, whatever the provider said.
    """
    if isinstance(parsed.matched_slug, str) and parsed.matched_slug in active_slugs:
        return parsed, False
    repaired = replace(
        parsed,
        matched_slug=fallback_slug,
        confidence="low",
        reasoning=FALLBACK_REASONING,
    )
    return repaired, True


def normalize_confidence(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in CONFIDENCE_LEVELS:
        return value.strip().lower()
    return "low"


def normalize_reasoning(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_REASONING


def select_alternate_slugs(
    slugs: Sequence[Any],
    active_slugs: Set[str],
    matched_slug: str,
    limit: int = MAX_ALTERNATES,
) -> List[str]:
    selected: List[str] = []
    for slug in slugs:
        if not isinstance(slug, str):
            continue
        if slug == matched_slug or slug not in active_slugs or slug in selected:
            continue
        selected.append(slug)
        if len(selected) == limit:
            break
    return selected


class IndustryMatcher:
    def __init__(self, catalog, provider, config: MatcherConfig) -> None:
        self._catalog = catalog
        self._provider = provider
        self._config = config

    async def match(self, business_description: Any) -> ClassificationResult:
        description = validate_description(business_description, self._config.max_description_length)

        if not self._config.api_key:
            logger.error("matcher.not_configured", reason="missing_anthropic_api_key")
            raise NotConfiguredError()

        candidates = await self._catalog.list_active_verticals()
        if not candidates:
            logger.error("matcher.no_active_industries")
            raise CatalogUnavailableError(details={"reason": "no_active_industries"})
        active_slugs = {c.slug for c in candidates}

        prompt = build_classification_prompt(description, candidates, self._config)
        raw = await self._classify(prompt)

        parsed = parse_classification(raw)
        if isinstance(parsed, InvalidClassification):
            logger.error("matcher.unparseable_response", reason=parsed.reason, response=raw[:500])
            raise ProviderContractViolationError(details={"reason": parsed.reason})

        parsed, fell_back = apply_fallback_policy(parsed, active_slugs, self._config.fallback_slug)
        if fell_back:
            logger.warning(
                "matcher.fallback_applied",
                fallback_slug=self._config.fallback_slug,
            )
        matched_slug = parsed.matched_slug

        if matched_slug not in active_slugs:
            # Only reachable when the fallback vertical itself is not active
            logger.error("matcher.fallback_inactive", fallback_slug=matched_slug)
            raise CatalogUnavailableError(details={"reason": "fallback_inactive", "slug": matched_slug})

        matched = await self._catalog.get_vertical_by_slug(matched_slug)
        if matched is None:
            logger.error("matcher.matched_industry_missing", slug=matched_slug)
            raise CatalogUnavailableError(details={"reason": "matched_industry_missing", "slug": matched_slug})

        alternates = await self._resolve_alternates(parsed.alternate_slugs, active_slugs, matched_slug)

        result = ClassificationResult(
            matched_industry=matched,
            confidence=normalize_confidence(parsed.confidence),
            reasoning=normalize_reasoning(parsed.reasoning),
            alternate_industries=alternates,
        )
        logger.info(
            "matcher.matched",
            slug=matched.slug,
            confidence=result.confidence,
            fallback=fell_back,
            alternates=[a.slug for a in alternates],
        )
        return result

    async def _classify(self, prompt: str) -> str:
        try:
            raw = await asyncio.wait_for(
                self._provider.classify(prompt),
                timeout=self._config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("matcher.provider_timeout", timeout_seconds=self._config.timeout_seconds)
            raise ProviderUnavailableError(details={"reason": "timeout"}) from e

        if raw is None:
            logger.error("matcher.no_text_block")
            raise ProviderContractViolationError(details={"reason": "no_text_block"})
        return raw

    async def _resolve_alternates(
        self,
        slugs: Sequence[Any],
        active_slugs: Set[str],
        matched_slug: str,
    ) -> List[IndustrySummary]:
        selected = select_alternate_slugs(slugs, active_slugs, matched_slug)
        if not selected:
            return []
        try:
            alternates = await self._catalog.get_verticals_by_slugs(selected)
        except CatalogUnavailableError as e:
            logger.warning("matcher.alternates_unavailable", slugs=selected, error=e.details)
            return []
        return order_by_slugs(alternates, selected)
