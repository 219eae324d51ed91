"""GeminiVisionClient — Google Gemini backend with ordered model fallback.

Gemini model identifiers get renamed and retired, so the client tries a
short ordered list of them. The first model that answers without an
``error`` field wins. An error that only says the model is missing or
unsupported moves on to the next candidate; any other error (bad key,
quota, malformed request) ends the scan immediately.
"""
import logging
from typing import Any, Optional, Sequence

import httpx

from agriscan.constants import (
    DEFAULT_GEMINI_MODELS,
    GEMINI_API_BASE,
    GEMINI_RESPONSE_MIME_TYPE,
    GEMINI_UNAVAILABLE_MARKERS,
    MSG_GEMINI_FALLBACK,
    VISION_TIMEOUT_SECONDS,
)
from agriscan.diagnosis import DiagnosisRequest, Vendor, VendorEnvelope
from agriscan.errors import RequestError, RequestErrorKind
from agriscan.vision.client import VisionClient

logger = logging.getLogger(__name__)


def build_payload(request: DiagnosisRequest) -> dict[str, Any]:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": request.prompt},
                    {
                        "inline_data": {
                            "mime_type": request.image.mime_type,
                            "data": request.image.data,
                        },
                    },
                ],
            }
        ],
        "generationConfig": {"response_mime_type": GEMINI_RESPONSE_MIME_TYPE},
    }


def error_message(payload: Any) -> Optional[str]:
    """Message of the response's ``error`` field, or None for a clean response."""
    match payload:
        case {"error": {"message": str() as message}} if message:
            return message
        case {"error": error} if error:
            return str(error)
        case dict():
            return None
        case _:
            return f"Unexpected response body: {payload!r}"


def is_unavailable(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in GEMINI_UNAVAILABLE_MARKERS)


class GeminiVisionClient(VisionClient):
    vendor = Vendor.GEMINI

    def __init__(
        self,
        api_key: str,
        models: Sequence[str] = tuple(DEFAULT_GEMINI_MODELS.split(",")),
        timeout: float = VISION_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._models = tuple(models)
        self._timeout = timeout
        self._transport = transport

    def endpoint(self, model: str) -> str:
        return f"{GEMINI_API_BASE}/{model}:generateContent"

    async def request(self, request: DiagnosisRequest) -> VendorEnvelope:
        payload = build_payload(request)
        last_error: Optional[str] = None
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            for model in self._models:
                try:
                    response = await client.post(
                        self.endpoint(model),
                        params={"key": self._api_key},
                        json=payload,
                    )
                    data = response.json()
                except (httpx.HTTPError, ValueError) as exc:
                    last_error = str(exc) or type(exc).__name__
                    logger.warning(MSG_GEMINI_FALLBACK, model, last_error)
                    continue

                match error_message(data):
                    case None:
                        logger.debug("Gemini model %s answered", model)
                        return VendorEnvelope(vendor=self.vendor, payload=data)
                    case message if is_unavailable(message):
                        last_error = message
                        logger.warning(MSG_GEMINI_FALLBACK, model, message)
                    case message:
                        logger.error("Gemini model %s rejected the request: %s", model, message)
                        raise RequestError(RequestErrorKind.REJECTED, message)

        raise RequestError(RequestErrorKind.ALL_ENDPOINTS_EXHAUSTED, last_error)
