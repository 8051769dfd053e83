"""OpenRouter service for structuring website text into a business summary.

This service uses the OpenAI Python SDK configured to talk to OpenRouter's
OpenAI-compatible API. It never falls back on its own: when the model cannot
produce a usable answer it reports ``Unavailable`` and the caller decides
what to do next.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import openai
from openai import AsyncOpenAI

from enrichment_api.core import config
from enrichment_api.errors import (
    AuthFailure,
    ParseError,
    ProviderNetworkError,
    QuotaExceeded,
)
from enrichment_api.models import StructuredSummary

logger = logging.getLogger(__name__)

# Characters of website text included in the prompt
PROMPT_CONTENT_LENGTH = 2000

DEFAULT_SUMMARY = "No summary available"

# OpenRouter answers 402 when the account has run out of credits
_QUOTA_STATUS_CODES = {402, 429}


@dataclass(frozen=True)
class Structured:
    """The model returned a parseable summary."""

    result: StructuredSummary


@dataclass(frozen=True)
class Unavailable:
    """The model could not be used; ``reason`` is for logs only."""

    reason: str


StructuringOutcome = Structured | Unavailable


class OpenRouterService:
    """Service for LLM-based website structuring via OpenRouter."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        # Prefer explicit api_key, otherwise env var; strip to avoid hidden whitespace/newlines.
        self.api_key = (api_key if api_key is not None else config.OPENROUTER_API_KEY).strip()
        self.model = model or config.OPENROUTER_MODEL
        self.timeout = timeout if timeout is not None else config.OPENROUTER_TIMEOUT

        default_headers: dict[str, str] = {}
        if config.OPENROUTER_SITE_URL:
            default_headers["HTTP-Referer"] = config.OPENROUTER_SITE_URL
        if config.OPENROUTER_APP_NAME:
            default_headers["X-Title"] = config.OPENROUTER_APP_NAME

        self._client: AsyncOpenAI | None = None
        self._default_headers = default_headers

    @property
    def is_configured(self) -> bool:
        """Check if the API key is configured."""
        return bool(self.api_key)

    def _get_client(self) -> AsyncOpenAI:
        """Get or create SDK client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=config.OPENROUTER_BASE_URL,
                default_headers=self._default_headers or None,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        """Close SDK client."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def structure(self, website_text: str, website_url: str) -> StructuringOutcome:
        """Ask the model for a structured summary of a website.

        Args:
            website_text: Cleaned website text; only the first
                PROMPT_CONTENT_LENGTH characters are sent.
            website_url: URL the text was fetched from.

        Returns:
            ``Structured`` with a normalized summary, or ``Unavailable`` when
            the key is missing, the reply is empty or unparseable, or the
            provider failed in an unclassified way.

        Raises:
            QuotaExceeded: Provider rate limit or credit exhaustion.
            AuthFailure: Provider rejected the API key.
            ProviderNetworkError: Provider unreachable or timed out.
        """
        if not self.is_configured:
            logger.warning("OpenRouter API key not configured")
            return Unavailable("API key not configured")

        prompt = self._build_enrichment_prompt(website_text, website_url)
        try:
            reply = await self._chat_completion(
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
            )
        except openai.RateLimitError as e:
            logger.error(f"OpenRouter rate limit hit: {e}")
            raise QuotaExceeded(str(e)) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"OpenRouter authentication failed: {e}")
            raise AuthFailure(str(e)) from e
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            logger.error(f"OpenRouter connection failed: {e}")
            raise ProviderNetworkError(str(e)) from e
        except openai.APIStatusError as e:
            if e.status_code in _QUOTA_STATUS_CODES:
                logger.error(f"OpenRouter quota exhausted: {e}")
                raise QuotaExceeded(str(e)) from e
            logger.exception("OpenRouter SDK request failed: %s", e)
            return Unavailable(f"provider returned HTTP {e.status_code}")
        except openai.OpenAIError as e:
            logger.exception("OpenRouter SDK request failed: %s", e)
            return Unavailable(f"provider error: {type(e).__name__}")

        if not reply:
            return Unavailable("empty model reply")

        try:
            data = self._extract_json(reply)
        except ParseError as e:
            logger.error(f"Failed to parse enrichment response as JSON: {e}")
            return Unavailable(f"unparseable model reply: {e}")

        return Structured(self._normalize(data))

    async def _chat_completion(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float = 0,
    ) -> str:
        client = self._get_client()
        resp = await client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
        )
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    def _build_enrichment_prompt(self, website_text: str, website_url: str) -> str:
        """Build the prompt for website structuring."""
        return f'''Analyze the following website content and provide structured information:

Website: {website_url}
Content: {website_text[:PROMPT_CONTENT_LENGTH]}

Provide the following in JSON format:
{{
  "summary": "1-2 sentence summary of what the company does",
  "whatTheyDo": ["bullet point 1", "bullet point 2", ...] (3-6 items),
  "keywords": ["keyword1", "keyword2", ...] (5-10 keywords),
  "signals": ["signal1", "signal2", ...] (2-4 derived signals about company growth, traction, or potential)
}}

Focus on:
- Core business and value proposition
- Target market and customers
- Key products or services
- Notable achievements or metrics
- Growth indicators

Return ONLY valid JSON, no additional text.'''

    def _extract_json(self, text: str) -> dict[str, Any]:
        """Parse the object spanning the first ``{`` to the last ``}``.

        Markdown fences and chatter around the object are ignored.
        """
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end < start:
            raise ParseError("No JSON object found in AI response")

        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise ParseError(str(e)) from e

        if not isinstance(data, dict):
            raise ParseError("AI response JSON is not an object")
        return data

    def _normalize(self, data: dict[str, Any]) -> StructuredSummary:
        """Fill gaps so callers always get all four fields."""
        summary = data.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = DEFAULT_SUMMARY

        return StructuredSummary(
            summary=summary.strip(),
            what_they_do=_string_list(data.get("whatTheyDo")),
            keywords=_string_list(data.get("keywords")),
            signals=_string_list(data.get("signals")),
        )


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]
