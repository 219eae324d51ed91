"""PlantAnalyzer: end-to-end scan outcomes with a stubbed backend."""
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from agriscan.analyzer import PlantAnalyzer, build_analyzer, client_factory_for
from agriscan.config import Config
from agriscan.diagnosis import (
    Failure,
    FailureReason,
    ImageInput,
    Success,
    UnclearImage,
    Vendor,
    VendorEnvelope,
)
from agriscan.errors import IntakeError, RequestError, RequestErrorKind
from agriscan.vision.claude import ClaudeVisionClient
from agriscan.vision.gemini import GeminiVisionClient
from agriscan.vision.openai import OpenAIVisionClient

APHID = {
    "pest_name": "Aphid",
    "disease_name": None,
    "severity": "Medium",
    "symptoms": ["curled leaves"],
    "cause": "sap-feeding insects",
    "organic_solution": {"pesticide": "Neem oil", "dosage": "5ml/L", "application": "spray weekly"},
    "chemical_solution": None,
    "prevention": ["inspect weekly", "remove debris", "use row covers"],
    "image_quality": "clear",
}

JPEG = ImageInput(data=b"\xff\xd8\xff\xe0fake-jpeg", mime_type="image/jpeg")


def make_config(provider: str = "claude", **keys) -> Config:
    return Config(
        telegram_bot_token="token",
        log_level="INFO",
        vision_provider=provider,
        vision_timeout=30.0,
        anthropic_api_key=keys.get("anthropic"),
        gemini_api_key=keys.get("gemini"),
        openai_api_key=keys.get("openai"),
    )


def make_analyzer(envelope=None, *, side_effect=None, credential="key"):
    backend = MagicMock()
    backend.request = AsyncMock(return_value=envelope, side_effect=side_effect)
    factory = MagicMock(return_value=backend)
    return PlantAnalyzer("claude", credential, factory), factory, backend


def claude_answer(text: str) -> VendorEnvelope:
    return VendorEnvelope(Vendor.CLAUDE, {"content": [{"type": "text", "text": text}]})


async def test_aphid_scan_succeeds_with_exact_record():
    analyzer, factory, backend = make_analyzer(claude_answer(json.dumps(APHID)))

    outcome = await analyzer.analyze(JPEG)

    assert outcome == Success(APHID)
    factory.assert_called_once_with("key")
    sent = backend.request.call_args.args[0]
    assert sent.image.mime_type == "image/jpeg"


async def test_missing_credential_sends_no_request():
    analyzer, factory, backend = make_analyzer(claude_answer("{}"), credential=None)

    outcome = await analyzer.analyze(JPEG)

    assert outcome == Failure(FailureReason.MISSING_CREDENTIAL)
    factory.assert_not_called()
    backend.request.assert_not_awaited()


async def test_no_image_is_failure():
    analyzer, factory, _ = make_analyzer(claude_answer("{}"))

    outcome = await analyzer.analyze(None)

    assert outcome == Failure(FailureReason.NO_IMAGE_SELECTED)
    factory.assert_not_called()


async def test_non_image_is_rejected_before_request():
    analyzer, factory, _ = make_analyzer(claude_answer("{}"))

    outcome = await analyzer.analyze(ImageInput(data=b"%PDF", mime_type="application/pdf"))

    assert outcome == Failure(FailureReason.UNSUPPORTED_MEDIA_TYPE, "application/pdf")
    factory.assert_not_called()


class CorruptImage(IntakeError):
    pass


async def test_unrecognised_intake_error_is_not_reported_as_missing_image():
    analyzer, factory, _ = make_analyzer(claude_answer("{}"))

    with patch("agriscan.analyzer.prepare", side_effect=CorruptImage("truncated file")):
        outcome = await analyzer.analyze(JPEG)

    assert outcome == Failure(FailureReason.INTAKE_REJECTED, "truncated file")
    factory.assert_not_called()


async def test_unclear_answer_is_unclear_image():
    body = dict(APHID, image_quality="unclear")
    analyzer, _, _ = make_analyzer(claude_answer(f"```json\n{json.dumps(body)}\n```"))

    assert await analyzer.analyze(JPEG) == UnclearImage()


async def test_malformed_answer_is_failure_not_exception():
    analyzer, _, _ = make_analyzer(claude_answer("Sorry, I cannot help with that."))

    outcome = await analyzer.analyze(JPEG)

    assert outcome.reason is FailureReason.MALFORMED_JSON


@pytest.mark.parametrize(
    ("kind", "reason"),
    [
        (RequestErrorKind.TRANSPORT, FailureReason.TRANSPORT),
        (RequestErrorKind.REJECTED, FailureReason.REJECTED),
        (RequestErrorKind.ALL_ENDPOINTS_EXHAUSTED, FailureReason.ALL_ENDPOINTS_EXHAUSTED),
    ],
)
async def test_request_errors_become_failures(kind, reason):
    analyzer, _, _ = make_analyzer(side_effect=RequestError(kind, "detail"))

    outcome = await analyzer.analyze(JPEG)

    assert outcome == Failure(reason, "detail")


async def test_each_scan_builds_a_fresh_client():
    analyzer, factory, _ = make_analyzer(claude_answer(json.dumps(APHID)))

    await analyzer.analyze(JPEG)
    await analyzer.analyze(JPEG)

    assert factory.call_count == 2


# ── wiring ────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("provider", "cls"),
    [("claude", ClaudeVisionClient), ("gemini", GeminiVisionClient), ("openai", OpenAIVisionClient)],
)
def test_factory_builds_configured_backend(provider, cls):
    factory = client_factory_for(make_config(provider))

    assert isinstance(factory("key"), cls)


def test_build_analyzer_uses_provider_credential():
    analyzer = build_analyzer(make_config("gemini", gemini="g-key", anthropic="a-key"))

    assert analyzer.provider == "gemini"
    assert analyzer.has_credential


def test_build_analyzer_without_key_has_no_credential():
    analyzer = build_analyzer(make_config("openai", anthropic="a-key"))

    assert not analyzer.has_credential
