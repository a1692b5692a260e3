import re
from typing import List, Optional

import structlog
from openai import AsyncOpenAI

from repair_api.config import settings
from repair_api.expert import prompts
from repair_api.expert.schemas import VehicleDescription

logger = structlog.get_logger()

_PART_SEPARATORS = re.compile(r",|\n")


class LLMConfigurationError(RuntimeError):
    """Raised when the LLM provider cannot be called with the current settings."""


def split_parts_list(text: str) -> List[str]:
    """Split a comma/newline separated parts reply into clean entries.

    Drops blanks, anything that looks like a JSON fragment, and lines that
    echo the guide's "overview" section instead of naming a part.
    """
    parts = []
    for item in _PART_SEPARATORS.split(text or ""):
        item = item.strip()
        if not item or item.startswith(("{", "[")):
            continue
        if "overview" in item.lower():
            continue
        parts.append(item)
    return parts


class RepairLLMClient:
    """
    Client for the repair guide model (any OpenAI-compatible chat endpoint).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        self.base_url = base_url or settings.llm_endpoint
        self.model = model or settings.llm_model
        self.api_key = api_key if api_key is not None else settings.llm_api_key
        self._client: Optional[AsyncOpenAI] = None
        logger.info("initialized_repair_llm_client", base_url=self.base_url, model=self.model)

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise LLMConfigurationError("Missing GROQ_API_KEY")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=settings.llm_timeout_seconds,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool, if one was opened."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _complete(self, messages: List[dict], model: Optional[str], json_mode: bool) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(
            model=model or self.model,
            messages=messages,
            temperature=settings.llm_temperature,
            **kwargs,
        )

        content = None
        if response.choices:
            content = response.choices[0].message.content
        return content.strip() if content else "{}"

    async def generate_guide(self, prompt: str, model: Optional[str] = None) -> str:
        """Ask for a repair guide and return the raw reply text.

        The reply is not validated here; callers run it through
        ``coerce_to_json_object`` and ``normalize_to_schema``.
        """
        messages = [
            {"role": "system", "content": prompts.SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        logger.info("generate_guide_start", model=model or self.model)

        try:
            raw_content = await self._complete(messages, model, settings.llm_json_mode)
        except Exception as e:
            logger.error("generate_guide_failed", error=str(e))
            raise

        logger.info("llm_response_received", raw_content_length=len(raw_content))
        return raw_content

    async def suggest_parts(self, request: VehicleDescription, model: Optional[str] = None) -> List[str]:
        """Ask for the most likely parts behind ``request.code``.

        Returns an empty list when no code was supplied.
        """
        if not request.code:
            return []

        messages = [{"role": "user", "content": prompts.build_parts_prompt(request)}]
        logger.info("suggest_parts_start", code=request.code)

        try:
            text = await self._complete(messages, model, json_mode=False)
        except Exception as e:
            logger.error("suggest_parts_failed", error=str(e))
            raise

        parts = split_parts_list(text)
        logger.info("suggest_parts_completed", count=len(parts))
        return parts
