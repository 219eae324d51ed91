"""Transient value objects for one scan: image, request, envelope, outcome."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from agriscan.constants import DIAGNOSIS_PROMPT, PROMPT_VERSION

# Parsed model answer, passed through as-is
DiagnosisRecord = dict[str, Any]


class Vendor(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass(frozen=True)
class ImageInput:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class EncodedImage:
    data: str
    mime_type: str


@dataclass(frozen=True)
class DiagnosisRequest:
    image: EncodedImage
    prompt: str = DIAGNOSIS_PROMPT
    prompt_version: str = PROMPT_VERSION


@dataclass(frozen=True)
class VendorEnvelope:
    """Raw decoded vendor response, tagged so the interpreter knows where the text lives."""
    vendor: Vendor
    payload: Any


class FailureReason(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    NO_IMAGE_SELECTED = "no_image_selected"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    INTAKE_REJECTED = "intake_rejected"
    TRANSPORT = "transport"
    REJECTED = "rejected"
    ALL_ENDPOINTS_EXHAUSTED = "all_endpoints_exhausted"
    NO_TEXT_CONTENT = "no_text_content"
    MALFORMED_JSON = "malformed_json"


@dataclass(frozen=True)
class Success:
    record: DiagnosisRecord


@dataclass(frozen=True)
class UnclearImage:
    pass


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    detail: Optional[str] = None


AnalysisOutcome = Union[Success, UnclearImage, Failure]


def build_request(image: EncodedImage) -> DiagnosisRequest:
    return DiagnosisRequest(image=image)


def describe(outcome: AnalysisOutcome) -> str:
    """Short label for logs."""
    match outcome:
        case Success():
            return "success"
        case UnclearImage():
            return "unclear image"
        case Failure(reason=reason):
            return f"failure ({reason.value})"
