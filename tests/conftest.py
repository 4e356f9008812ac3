from __future__ import annotations

from typing import Any, AsyncIterator, List, Optional

import pytest

from career_docs_ai.schemas.candidate import CandidateDocument, Profile
from career_docs_ai.services.llm_client import TextGenerator


async def _scripted_chunks(script: List[Any], closed: List[bool]) -> AsyncIterator[str]:
    try:
        for item in script:
            if isinstance(item, BaseException):
                raise item
            yield item
    finally:
        closed.append(True)


class FakeTextGenerator(TextGenerator):
    """Scripted provider: one canned response, plus one chunk script per streamed call."""

    def __init__(
        self,
        response: str = "",
        *,
        error: Optional[BaseException] = None,
        streams: Optional[List[Any]] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.streams = list(streams or [])
        self.calls: list[dict] = []
        self.stream_calls: list[dict] = []
        self.closed_streams: list[bool] = []

    async def generate(self, system_instruction, messages, max_output_tokens, temperature=None) -> str:
        self.calls.append(
            {
                "system": system_instruction,
                "messages": messages,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def generate_streaming(self, system_instruction, messages, max_output_tokens, temperature=None):
        self.stream_calls.append(
            {
                "system": system_instruction,
                "messages": messages,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
            }
        )
        script = self.streams.pop(0) if self.streams else []
        if isinstance(script, BaseException):
            raise script
        return _scripted_chunks(script, self.closed_streams)


@pytest.fixture
def make_generator():
    return FakeTextGenerator


@pytest.fixture
def acme_document() -> CandidateDocument:
    return CandidateDocument(
        name="CV 2024",
        type="cv",
        content="Built and deployed 3 microservices using Docker containers at Acme Corp",
    )


@pytest.fixture
def profile() -> Profile:
    return Profile(name="Jane Doe", summary="Backend engineer focused on services.", location="Aarhus")
