"""Response interpreter — vendor envelope → AnalysisOutcome.

Model output is untrusted text. Every failure to find or parse it becomes a
``Failure`` outcome; nothing here raises.
"""
import json
import logging
import re
from typing import Any, Iterable, Optional

from agriscan.constants import IMAGE_QUALITY_UNCLEAR
from agriscan.diagnosis import (
    AnalysisOutcome,
    Failure,
    FailureReason,
    Success,
    UnclearImage,
    Vendor,
    VendorEnvelope,
)

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```json\n?|\n?```")


# ── per-vendor text extraction ────────────────────────────────────────────────


def _first_text(parts: Iterable[Any]) -> Optional[str]:
    """First non-empty string ``text`` among the parts."""
    return next(
        (
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str) and part["text"]
        ),
        None,
    )


def _claude_text(payload: Any) -> Optional[str]:
    match payload:
        case {"content": list() as parts}:
            return _first_text(p for p in parts if isinstance(p, dict) and p.get("type") == "text")
        case _:
            return None


def _gemini_text(payload: Any) -> Optional[str]:
    match payload:
        case {"candidates": [{"content": {"parts": list() as parts}}, *_]}:
            return _first_text(parts)
        case _:
            return None


def _openai_text(payload: Any) -> Optional[str]:
    match payload:
        case {"choices": list() as choices}:
            return next(
                (
                    c["message"]["content"]
                    for c in choices
                    if isinstance(c, dict)
                    and isinstance(c.get("message"), dict)
                    and isinstance(c["message"].get("content"), str)
                    and c["message"]["content"]
                ),
                None,
            )
        case _:
            return None


def extract_text(envelope: VendorEnvelope) -> Optional[str]:
    """First textual answer in the envelope, or None."""
    match envelope.vendor:
        case Vendor.CLAUDE:
            return _claude_text(envelope.payload)
        case Vendor.GEMINI:
            return _gemini_text(envelope.payload)
        case Vendor.OPENAI:
            return _openai_text(envelope.payload)
        case _:
            return None


# ── parsing ───────────────────────────────────────────────────────────────────


def strip_code_fence(text: str) -> str:
    """Drop ```json / ``` markers models sometimes wrap JSON answers in."""
    return _CODE_FENCE.sub("", text).strip()


def interpret(envelope: VendorEnvelope) -> AnalysisOutcome:
    text = extract_text(envelope)
    match text:
        case None:
            logger.warning("No text content in %s response", envelope.vendor.value)
            return Failure(FailureReason.NO_TEXT_CONTENT)
        case _:
            pass

    cleaned = strip_code_fence(text)
    try:
        record = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        logger.warning("Model answer is not valid JSON: %s", exc)
        return Failure(FailureReason.MALFORMED_JSON, str(exc))

    match record:
        case {"image_quality": quality} if quality == IMAGE_QUALITY_UNCLEAR:
            return UnclearImage()
        case dict():
            return Success(record)
        case _:
            logger.warning("Model answer is %s, expected a JSON object", type(record).__name__)
            return Failure(FailureReason.MALFORMED_JSON, "expected a JSON object")
