"""
Turn untrusted extraction output into a well-formed CandidateFactInventory.

Everything here is total: any input (garbage text, truncated JSON, JSON of the
wrong shape) yields a valid inventory, never an exception. Elements missing
their mandatory field are dropped; everything else is re-typed, and enum
fields fall back to their weakest member.
"""

import json
import re
from typing import Any, Callable, List, Optional, TypeVar

from pydantic import ValidationError

from career_docs_ai.config import UNKNOWN_SOURCE
from career_docs_ai.schemas.fact_inventory import (
    CONFIDENCE_LEVELS,
    CREDENTIAL_TYPES,
    MOST_CONSERVATIVE_CONFIDENCE,
    MOST_CONSERVATIVE_CREDENTIAL_TYPE,
    CandidateFactInventory,
    ExtractedAchievement,
    ExtractedCredential,
    ExtractedSkill,
    empty_inventory,
)
from career_docs_ai.utils.helpers import deduplicate_names
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove one markdown code fence wrapper (```json ... ```), not nested ones."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = _LEADING_FENCE.sub("", raw, count=1)
    if raw.endswith("```"):
        raw = _TRAILING_FENCE.sub("", raw, count=1)
    return raw.strip()


def parse_inventory_json(text: Any) -> Optional[dict]:
    """Strictly parse extraction output as a JSON object; None on any failure."""
    if not isinstance(text, str):
        return None
    raw = strip_code_fence(text)
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def _clean_str(value: str) -> str:
    # Lone surrogates from JSON escapes are not valid text downstream
    return value.encode("utf-8", "replace").decode("utf-8")


def _coerce_text(value: Any, default: str = "") -> str:
    """Re-type a loosely typed field as a string; blanks and containers become the default."""
    if isinstance(value, str):
        return _clean_str(value) if value.strip() else default
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return str(value)
    return default


def _validate_confidence(value: Any) -> str:
    if isinstance(value, str) and value in CONFIDENCE_LEVELS:
        return value
    return MOST_CONSERVATIVE_CONFIDENCE


def _validate_credential_type(value: Any) -> str:
    if isinstance(value, str) and value in CREDENTIAL_TYPES:
        return value
    return MOST_CONSERVATIVE_CREDENTIAL_TYPE


def _build_skill(item: dict) -> ExtractedSkill:
    return ExtractedSkill(
        skill=_clean_str(item["skill"]),
        source=_coerce_text(item.get("source"), UNKNOWN_SOURCE),
        context=_coerce_text(item.get("context")),
        confidence=_validate_confidence(item.get("confidence")),
    )


def _build_achievement(item: dict) -> ExtractedAchievement:
    metrics = item.get("metrics")
    return ExtractedAchievement(
        description=_clean_str(item["description"]),
        metrics=_clean_str(metrics) if isinstance(metrics, str) and metrics.strip() else None,
        source=_coerce_text(item.get("source"), UNKNOWN_SOURCE),
    )


def _build_credential(item: dict) -> ExtractedCredential:
    return ExtractedCredential(
        type=_validate_credential_type(item.get("type")),
        name=_clean_str(item["name"]),
        source=_coerce_text(item.get("source"), UNKNOWN_SOURCE),
    )


def _sanitize_records(
    data: dict,
    key: str,
    required_field: str,
    build: Callable[[dict], T],
) -> List[T]:
    """Keep dict elements whose required field is a string, rebuilt through ``build``."""
    items = data.get(key)
    if not isinstance(items, list):
        if items is not None:
            logger.debug("Ignoring %s: expected list, got %s", key, type(items).__name__)
        return []
    result: List[T] = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get(required_field), str):
            logger.debug("Dropping %s entry without string %r", key, required_field)
            continue
        try:
            result.append(build(item))
        except ValidationError as e:
            logger.debug("Dropping invalid %s entry: %s", key, e)
    return result


def _sanitize_companies(data: dict) -> List[str]:
    items = data.get("companies")
    if not isinstance(items, list):
        return []
    names = [_clean_str(c).strip() for c in items if isinstance(c, str)]
    return deduplicate_names([n for n in names if n])


def sanitize_inventory_data(data: Any) -> CandidateFactInventory:
    """Sanitize an already-parsed JSON value into an inventory."""
    if not isinstance(data, dict):
        return empty_inventory()
    return CandidateFactInventory(
        skills=_sanitize_records(data, "skills", "skill", _build_skill),
        achievements=_sanitize_records(data, "achievements", "description", _build_achievement),
        credentials=_sanitize_records(data, "credentials", "name", _build_credential),
        companies=_sanitize_companies(data),
    )


def sanitize_inventory(raw_text: Any) -> CandidateFactInventory:
    """Parse and sanitize raw extraction output. Never raises."""
    parsed = parse_inventory_json(raw_text)
    if parsed is None:
        return empty_inventory()
    return sanitize_inventory_data(parsed)
