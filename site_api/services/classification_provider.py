# site_api/services/classification_provider.py
"""Hosted language-model client used by the industry matcher."""

from __future__ import annotations

from typing import Any, Optional

import anthropic

from site_api.core.config import settings
from site_api.core.exceptions import NotConfiguredError, ProviderUnavailableError
from site_api.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


def first_text_block(message: Any) -> Optional[str]:
    """Return the text of the first ``text`` content block, if any."""
    for block in getattr(message, "content", None) or []:
        if getattr(block, "type", None) == "text":
            return block.text
    return None


class AnthropicClassificationProvider:
    """Sends one prompt to the Messages API and returns the first text block.

    The SDK's own retry loop is disabled: a failed call is reported once as
    :class:`ProviderUnavailableError` and the request ends there.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str,
        max_tokens: int,
        timeout_seconds: float,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self._api_key:
                raise NotConfiguredError(details={"reason": "missing_anthropic_api_key"})
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def classify(self, prompt: str) -> Optional[str]:
        client = self._get_client()
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.error(
                "provider.request_failed",
                status_code=e.status_code,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise ProviderUnavailableError(details={"status_code": e.status_code}) from e
        except anthropic.APIError as e:
            # Connection errors and timeouts
            logger.error("provider.request_failed", error_type=type(e).__name__, error=str(e))
            raise ProviderUnavailableError(details={"error_type": type(e).__name__}) from e

        logger.info(
            "provider.response_received",
            model=self._model,
            stop_reason=getattr(message, "stop_reason", None),
        )
        return first_text_block(message)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()


# Global provider instance, shared by all requests in the process
_provider: Optional[AnthropicClassificationProvider] = None


def get_classification_provider() -> AnthropicClassificationProvider:
    global _provider

    if _provider is None:
        _provider = AnthropicClassificationProvider(
            settings.anthropic_api_key,
            model=settings.anthropic_model,
            max_tokens=settings.anthropic_max_tokens,
            timeout_seconds=settings.matcher_timeout_seconds,
        )
    return _provider


async def close_classification_provider() -> None:
    global _provider

    if _provider is not None:
        await _provider.close()
        _provider = None
