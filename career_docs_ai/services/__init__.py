"""Service exports. The generation pipeline lives in ``services.generation_service``."""

from .llm_client import OpenAITextGenerator, TextGenerator, get_text_generator

__all__ = [
    "OpenAITextGenerator",
    "TextGenerator",
    "get_text_generator",
]
