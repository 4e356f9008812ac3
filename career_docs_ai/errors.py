"""Exceptions raised by the generation pipeline."""


class CareerDocsError(Exception):
    """Base error for the package."""


class InputValidationError(CareerDocsError, ValueError):
    """Request rejected before any model call."""


class LLMProviderError(CareerDocsError):
    """The text-generation provider failed or returned nothing usable."""


class GenerationError(CareerDocsError):
    """Prose generation failed before any output was delivered."""
