"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

# Models: a small fast model for extraction, a stronger one for writing
EXTRACTION_MODEL_NAME: str = os.getenv("EXTRACTION_MODEL_NAME", "gpt-4o-mini")
GENERATION_MODEL_NAME: str = os.getenv("GENERATION_MODEL_NAME", "gpt-4o")

# LLM call settings
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "0"))

EXTRACTION_TEMPERATURE: float = 0.0
EXTRACTION_MAX_TOKENS: int = 4096

COVER_LETTER_TEMPERATURE: float = 0.35
COVER_LETTER_MAX_TOKENS: int = 4096

SUMMARY_TEMPERATURE: float = 0.3
SUMMARY_MAX_TOKENS: int = 500

REFINE_TEMPERATURE: float = 0.35
REFINE_MAX_TOKENS: int = 4096
SUMMARY_REFINE_MAX_TOKENS: int = 500

# Languages the writing prompts know how to ask for
DEFAULT_LANGUAGE: str = "en"
SUPPORTED_LANGUAGES: tuple = ("en", "da")

# Provenance placeholder for extracted facts without a source document
UNKNOWN_SOURCE: str = "Unknown"

# Uploads
UPLOAD_MAX_CHARS: int = 50000
SUPPORTED_UPLOAD_SUFFIXES: tuple = (".pdf", ".docx", ".txt", ".md")
