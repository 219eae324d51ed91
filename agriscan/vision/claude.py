"""ClaudeVisionClient — Anthropic Claude vision backend."""
import logging

import anthropic
from anthropic import AsyncAnthropic

from agriscan.constants import CLAUDE_MAX_TOKENS, CLAUDE_VISION_MODEL, VISION_TIMEOUT_SECONDS
from agriscan.diagnosis import DiagnosisRequest, Vendor, VendorEnvelope
from agriscan.errors import RequestError, RequestErrorKind
from agriscan.vision.client import VisionClient

logger = logging.getLogger(__name__)


class ClaudeVisionClient(VisionClient):
    vendor = Vendor.CLAUDE

    def __init__(
        self,
        api_key: str,
        model: str = CLAUDE_VISION_MODEL,
        timeout: float = VISION_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    async def request(self, request: DiagnosisRequest) -> VendorEnvelope:
        client = AsyncAnthropic(api_key=self._api_key, timeout=self._timeout)
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=CLAUDE_MAX_TOKENS,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": request.image.mime_type,
                                    "data": request.image.data,
                                },
                            },
                            {"type": "text", "text": request.prompt},
                        ],
                    }
                ],
            )
        except anthropic.APIError as exc:
            logger.warning("Claude request failed: %s", exc)
            raise RequestError(RequestErrorKind.TRANSPORT, str(exc)) from exc
        finally:
            await client.close()
        return VendorEnvelope(vendor=self.vendor, payload=message.model_dump())
