"""
LLM Client - async wrapper for OpenAI and Anthropic.

Used by the chatbot, news generation, AI similarity and recommendation
features. Every caller treats a missing client (no key configured) the same
way it treats a failed call: fall back or return an empty result.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI
from anthropic import AsyncAnthropic

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-20241022",
}


@dataclass
class LLMResponse:
    """Response from LLM call."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    raw_response: Any = None

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def parse_json(self) -> Optional[Dict]:
        """Parse content as JSON, handling markdown code blocks."""
        text = self.content.strip()

        if text.startswith("```"):
            lines = text.split("\n")[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines)

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            return None


class LLMClient:
    """
    Unified async LLM client supporting OpenAI and Anthropic.

    Usage:
        client = LLMClient(provider="openai", api_key="sk-...")
        response = await client.complete("Rank these companies...", json_mode=True)
        data = response.parse_json()
    """

    def __init__(
        self,
        provider: str = "openai",
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        max_retries: int = 1,
        retry_delay: float = 1.0,
    ):
        self.provider = provider.lower()
        self.api_key = api_key
        self.model = model or DEFAULT_MODELS.get(self.provider, DEFAULT_MODELS["openai"])
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self._client = None
        self._total_tokens_used = 0

    @property
    def is_available(self) -> bool:
        return self.provider in DEFAULT_MODELS and bool(self.api_key)

    def _get_client(self):
        """Get or create the SDK client."""
        if self._client is None:
            if self.provider == "openai":
                self._client = AsyncOpenAI(api_key=self.api_key)
            else:
                self._client = AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Send a single-prompt completion request.

        Args:
            prompt: User prompt
            system_prompt: Optional system message
            json_mode: Request JSON output format (OpenAI only)
        """
        return await self.chat(
            [{"role": "user", "content": prompt}],
            system_prompt=system_prompt,
            json_mode=json_mode,
        )

    async def chat(
        self,
        messages: List[Dict[str, str]],
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Send a multi-turn conversation.

        Args:
            messages: [{"role": "user"|"assistant", "content": str}, ...]
            system_prompt: Optional system message
            json_mode: Request JSON output format (OpenAI only)

        Raises:
            ValueError: If provider not available
            Exception: After all retries exhausted
        """
        if not self.is_available:
            raise ValueError(
                f"LLM provider '{self.provider}' not available. Check that the API key is set."
            )

        client = self._get_client()
        last_error = None

        for attempt in range(self.max_retries):
            try:
                if self.provider == "openai":
                    response = await self._openai_chat(client, messages, system_prompt, json_mode)
                else:
                    response = await self._anthropic_chat(client, messages, system_prompt)

                self._total_tokens_used += response.total_tokens
                return response

            except Exception as e:
                last_error = e
                logger.warning(
                    f"LLM request failed (attempt {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.retry_delay * (2 ** attempt))

        raise last_error or Exception("LLM request failed after all retries")

    async def _openai_chat(
        self,
        client: AsyncOpenAI,
        messages: List[Dict[str, str]],
        system_prompt: Optional[str],
        json_mode: bool,
    ) -> LLMResponse:
        payload = []
        if system_prompt:
            payload.append({"role": "system", "content": system_prompt})
        payload.extend(messages)

        kwargs = {
            "model": self.model,
            "messages": payload,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await client.chat.completions.create(**kwargs)

        return LLMResponse(
            content=response.choices[0].message.content or "",
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            model=self.model,
            raw_response=response,
        )

    async def _anthropic_chat(
        self,
        client: AsyncAnthropic,
        messages: List[Dict[str, str]],
        system_prompt: Optional[str],
    ) -> LLMResponse:
        kwargs = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": messages,
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        response = await client.messages.create(**kwargs)

        return LLMResponse(
            content=response.content[0].text if response.content else "",
            input_tokens=response.usage.input_tokens if response.usage else 0,
            output_tokens=response.usage.output_tokens if response.usage else 0,
            model=self.model,
            raw_response=response,
        )

    @property
    def total_tokens_used(self) -> int:
        """Total tokens used across all requests."""
        return self._total_tokens_used


def get_llm_client(provider: Optional[str] = None) -> Optional[LLMClient]:
    """
    Get an LLM client using settings from config.

    Returns:
        LLMClient if an API key is available, None otherwise
    """
    from app.core.config import get_settings

    settings = get_settings()

    provider = provider or settings.llm_provider
    if provider is None:
        # Try OpenAI first, then Anthropic
        if settings.get_openai_api_key():
            provider = "openai"
        elif settings.get_anthropic_api_key():
            provider = "anthropic"
        else:
            logger.warning("No LLM API key configured (OPENAI_API_KEY or ANTHROPIC_API_KEY)")
            return None

    api_key = (
        settings.get_openai_api_key() if provider == "openai"
        else settings.get_anthropic_api_key()
    )
    if not api_key:
        logger.warning(f"No API key configured for {provider}")
        return None

    return LLMClient(
        provider=provider,
        api_key=api_key,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
        max_retries=settings.llm_max_retries,
    )
