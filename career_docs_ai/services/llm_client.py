"""Text-generation capability: one-shot and streamed calls, provider-agnostic."""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from career_docs_ai.config import (
    GENERATION_MODEL_NAME,
    LLM_MAX_RETRIES,
    LLM_TIMEOUT_SECONDS,
    OPENAI_API_KEY,
)
from career_docs_ai.errors import LLMProviderError
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)

Message = Dict[str, str]


class TextGenerator(ABC):
    """Abstract text-generation provider."""

    @abstractmethod
    async def generate(
        self,
        system_instruction: str,
        messages: List[Message],
        max_output_tokens: int,
        temperature: Optional[float] = None,
    ) -> str:
        """Return the full response text. Raises LLMProviderError on failure."""
        ...

    @abstractmethod
    async def generate_streaming(
        self,
        system_instruction: str,
        messages: List[Message],
        max_output_tokens: int,
        temperature: Optional[float] = None,
    ) -> AsyncIterator[str]:
        """
        Open a streamed call and return an async generator of text chunks.
        Failing to open raises here; failures while iterating raise from the generator.
        Calling ``aclose()`` on the generator releases the underlying response.
        """
        ...


class OpenAITextGenerator(TextGenerator):
    """Chat Completions via the OpenAI async SDK."""

    def __init__(
        self,
        model: str = GENERATION_MODEL_NAME,
        api_key: str = OPENAI_API_KEY,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=LLM_MAX_RETRIES,
        )

    def _request_kwargs(
        self,
        system_instruction: str,
        messages: List[Message],
        max_output_tokens: int,
        temperature: Optional[float],
    ) -> dict:
        kwargs = {
            "model": self.model,
            "messages": [{"role": "system", "content": system_instruction}, *messages],
            "max_tokens": max_output_tokens,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        return kwargs

    async def generate(
        self,
        system_instruction: str,
        messages: List[Message],
        max_output_tokens: int,
        temperature: Optional[float] = None,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                **self._request_kwargs(system_instruction, messages, max_output_tokens, temperature)
            )
        except openai.OpenAIError as e:
            raise LLMProviderError(f"OpenAI request failed: {e}") from e
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            return ""
        return choice.message.content

    async def generate_streaming(
        self,
        system_instruction: str,
        messages: List[Message],
        max_output_tokens: int,
        temperature: Optional[float] = None,
    ) -> AsyncIterator[str]:
        try:
            stream = await self._client.chat.completions.create(
                stream=True,
                **self._request_kwargs(system_instruction, messages, max_output_tokens, temperature),
            )
        except openai.OpenAIError as e:
            raise LLMProviderError(f"OpenAI stream could not be opened: {e}") from e
        return self._iter_chunks(stream)

    async def _iter_chunks(self, stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if delta is not None and delta.content:
                    yield delta.content
        except openai.OpenAIError as e:
            raise LLMProviderError(f"OpenAI stream failed: {e}") from e
        finally:
            # Releases the HTTP response when the consumer stops early
            await stream.close()


def get_text_generator(model: str = GENERATION_MODEL_NAME) -> TextGenerator:
    """Return a provider for ``model`` configured from the environment."""
    if not OPENAI_API_KEY:
        raise LLMProviderError("OPENAI_API_KEY is not set; cannot call the language model")
    logger.info("Using OpenAI text generator: model=%s", model)
    return OpenAITextGenerator(model=model, api_key=OPENAI_API_KEY)
