# site_api/services/__init__.py
"""
Business logic services organized by domain functionality.
"""

from site_api.services.classification_provider import (
    AnthropicClassificationProvider,
    get_classification_provider,
)
from site_api.services.industry_catalog import IndustryCatalog
from site_api.services.industry_matcher import (
    ClassificationResult,
    IndustryMatcher,
    MatcherConfig,
)

__all__ = [
    # Classification provider
    "AnthropicClassificationProvider",
    "get_classification_provider",
    # Catalog
    "IndustryCatalog",
    # Matcher
    "ClassificationResult",
    "IndustryMatcher",
    "MatcherConfig",
]
