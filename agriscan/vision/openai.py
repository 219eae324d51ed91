"""OpenAIVisionClient — OpenAI GPT-4o vision backend."""
import logging

import openai
from openai import AsyncOpenAI

from agriscan.constants import OPENAI_VISION_MODEL, VISION_TIMEOUT_SECONDS
from agriscan.diagnosis import DiagnosisRequest, Vendor, VendorEnvelope
from agriscan.errors import RequestError, RequestErrorKind
from agriscan.vision.client import VisionClient

logger = logging.getLogger(__name__)


class OpenAIVisionClient(VisionClient):
    vendor = Vendor.OPENAI

    def __init__(
        self,
        api_key: str,
        model: str = OPENAI_VISION_MODEL,
        timeout: float = VISION_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    async def request(self, request: DiagnosisRequest) -> VendorEnvelope:
        client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout)
        data_url = f"data:{request.image.mime_type};base64,{request.image.data}"
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "image_url", "image_url": {"url": data_url}},
                            {"type": "text", "text": request.prompt},
                        ],
                    }
                ],
                response_format={"type": "json_object"},
            )
        except openai.APIError as exc:
            logger.warning("OpenAI request failed: %s", exc)
            raise RequestError(RequestErrorKind.TRANSPORT, str(exc)) from exc
        finally:
            await client.close()
        return VendorEnvelope(vendor=self.vendor, payload=response.model_dump())
