"""PlantAnalyzer — intake → request → interpret, one outcome per scan."""
import logging
from typing import Callable, Optional

from agriscan.config import Config
from agriscan.diagnosis import (
    AnalysisOutcome,
    Failure,
    FailureReason,
    ImageInput,
    build_request,
)
from agriscan.errors import (
    IntakeError,
    MissingCredential,
    NoImageSelected,
    RequestError,
    RequestErrorKind,
    UnsupportedMediaType,
)
from agriscan.intake import prepare
from agriscan.interpreter import interpret
from agriscan.vision.claude import ClaudeVisionClient
from agriscan.vision.client import VisionClient
from agriscan.vision.gemini import GeminiVisionClient
from agriscan.vision.openai import OpenAIVisionClient

logger = logging.getLogger(__name__)

# credential → ready-to-use backend
ClientFactory = Callable[[str], VisionClient]


def _intake_failure(exc: IntakeError) -> Failure:
    match exc:
        case MissingCredential():
            return Failure(FailureReason.MISSING_CREDENTIAL)
        case UnsupportedMediaType(mime_type=mime):
            return Failure(FailureReason.UNSUPPORTED_MEDIA_TYPE, mime)
        case NoImageSelected():
            return Failure(FailureReason.NO_IMAGE_SELECTED)
        case _:
            return Failure(FailureReason.INTAKE_REJECTED, str(exc))


def _request_failure(exc: RequestError) -> Failure:
    match exc.kind:
        case RequestErrorKind.REJECTED:
            return Failure(FailureReason.REJECTED, exc.detail)
        case RequestErrorKind.ALL_ENDPOINTS_EXHAUSTED:
            return Failure(FailureReason.ALL_ENDPOINTS_EXHAUSTED, exc.detail)
        case _:
            return Failure(FailureReason.TRANSPORT, exc.detail)


class PlantAnalyzer:
    """Runs one scan end to end. Holds no state between scans."""

    def __init__(
        self,
        provider: str,
        credential: Optional[str],
        client_factory: ClientFactory,
    ) -> None:
        self.provider = provider
        self._credential = credential
        self._client_factory = client_factory

    @property
    def has_credential(self) -> bool:
        return bool(self._credential)

    async def analyze(self, image: Optional[ImageInput]) -> AnalysisOutcome:
        try:
            encoded = prepare(image, self._credential)
        except IntakeError as exc:
            logger.info("Scan rejected at intake: %s", exc)
            return _intake_failure(exc)

        client = self._client_factory(self._credential)
        try:
            envelope = await client.request(build_request(encoded))
        except RequestError as exc:
            logger.warning("%s request failed: %s", self.provider, exc)
            return _request_failure(exc)

        return interpret(envelope)


def client_factory_for(config: Config) -> ClientFactory:
    match config.vision_provider:
        case "claude":
            return lambda key: ClaudeVisionClient(
                key, model=config.claude_model, timeout=config.vision_timeout
            )
        case "gemini":
            return lambda key: GeminiVisionClient(
                key, models=config.gemini_models, timeout=config.vision_timeout
            )
        case "openai":
            return lambda key: OpenAIVisionClient(
                key, model=config.openai_model, timeout=config.vision_timeout
            )
        case other:
            raise ValueError(f"Unknown vision provider: {other}")


def build_analyzer(config: Config) -> PlantAnalyzer:
    return PlantAnalyzer(
        provider=config.vision_provider,
        credential=config.credential_for(config.vision_provider),
        client_factory=client_factory_for(config),
    )
