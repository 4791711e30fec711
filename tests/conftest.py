# tests/conftest.py
import asyncio
import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key")

import pytest

from site_api.core.exceptions import CatalogUnavailableError
from site_api.schemas.industry import IndustryCandidate, IndustrySummary, IndustryVertical
from site_api.services.industry_matcher import MatcherConfig


def industry(slug, name=None, tagline=None, is_active=True, **extra):
    return {
        "id": f"id-{slug}",
        "slug": slug,
        "name": name or slug.replace("-", " ").title(),
        "tagline": tagline if tagline is not None else f"{slug} businesses",
        "icon_name": "Briefcase",
        "is_active": is_active,
        **extra,
    }


DEFAULT_INDUSTRIES = [
    industry("construction", "Construction", "Builders and renovators"),
    industry("real-estate", "Real Estate", "Agencies and property managers"),
    industry("professional-services", "Professional Services", "Accountants, lawyers, consultants"),
]


class FakeCatalog:
    """In-memory stand-in for IndustryCatalog that records every call."""

    def __init__(self, industries=None, *, fail_on=(), missing_full=()):
        self.industries = list(DEFAULT_INDUSTRIES if industries is None else industries)
        self.fail_on = set(fail_on)
        self.missing_full = set(missing_full)
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise CatalogUnavailableError(details={"error": f"{name} failed"})

    async def list_active_verticals(self):
        self._maybe_fail("list_active_verticals")
        return [IndustryCandidate.model_validate(i) for i in self.industries if i["is_active"]]

    async def get_vertical_by_slug(self, slug):
        self._maybe_fail("get_vertical_by_slug")
        if slug in self.missing_full:
            return None
        for i in self.industries:
            if i["slug"] == slug:
                return IndustryVertical.model_validate(i)
        return None

    async def get_verticals_by_slugs(self, slugs):
        self._maybe_fail("get_verticals_by_slugs")
        # Deliberately returned in catalog order, not request order
        return [
            IndustrySummary.model_validate(i)
            for i in self.industries
            if i["is_active"] and i["slug"] in slugs
        ]

    async def list_active_industries(self):
        self._maybe_fail("list_active_industries")
        return [IndustryVertical.model_validate(i) for i in self.industries if i["is_active"]]

    async def get_industry_details(self, slug):
        self._maybe_fail("get_industry_details")
        return None

    async def get_related_industries(self, slugs):
        self._maybe_fail("get_related_industries")
        return []


class FakeProvider:
    """Returns a canned text block (or raises) and records prompts."""

    def __init__(self, response=None, *, error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts = []

    async def classify(self, prompt):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def matcher_config():
    return MatcherConfig(api_key="test-key", fallback_slug="professional-services", timeout_seconds=2.0)


@pytest.fixture
def catalog():
    return FakeCatalog()
