from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from agriscan.constants import (
    CLAUDE_VISION_MODEL,
    DEFAULT_GEMINI_MODELS,
    DEFAULT_PROVIDER,
    VISION_TIMEOUT_SECONDS,
    OPENAI_VISION_MODEL,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
)

# provider → env var holding its key
CREDENTIAL_ENV = {
    PROVIDER_CLAUDE: "ANTHROPIC_API_KEY",
    PROVIDER_GEMINI: "GEMINI_API_KEY",
    PROVIDER_OPENAI: "OPENAI_API_KEY",
}


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    log_level: str
    vision_provider: str
    vision_timeout: float
    anthropic_api_key: Optional[str]
    gemini_api_key: Optional[str]
    openai_api_key: Optional[str]
    claude_model: str = CLAUDE_VISION_MODEL
    openai_model: str = OPENAI_VISION_MODEL
    gemini_models: tuple[str, ...] = tuple(DEFAULT_GEMINI_MODELS.split(","))

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        provider = os.getenv("VISION_PROVIDER") or None
        timeout = os.getenv("VISION_TIMEOUT") or VISION_TIMEOUT_SECONDS
        anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None
        gemini_api_key = os.getenv("GEMINI_API_KEY") or None
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        claude_model = os.getenv("CLAUDE_VISION_MODEL") or CLAUDE_VISION_MODEL
        openai_model = os.getenv("OPENAI_VISION_MODEL") or OPENAI_VISION_MODEL
        raw_models = os.getenv("GEMINI_MODELS", DEFAULT_GEMINI_MODELS)

        gemini_models = tuple(m.strip() for m in raw_models.split(",") if m.strip())

        return cls._validate(
            telegram_bot_token=token,
            log_level=log_level,
            vision_provider=provider,
            vision_timeout=float(timeout),
            anthropic_api_key=anthropic_api_key,
            gemini_api_key=gemini_api_key,
            openai_api_key=openai_api_key,
            claude_model=claude_model,
            openai_model=openai_model,
            gemini_models=gemini_models,
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        log_level: str,
        vision_provider: Optional[str],
        vision_timeout: float,
        anthropic_api_key: Optional[str],
        gemini_api_key: Optional[str],
        openai_api_key: Optional[str],
        claude_model: str,
        openai_model: str,
        gemini_models: tuple[str, ...],
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match (vision_provider or "").strip().lower():
            case "":
                provider = _pick_provider(anthropic_api_key, gemini_api_key, openai_api_key)
            case p if p in CREDENTIAL_ENV:
                provider = p
            case other:
                raise ValueError(
                    f"VISION_PROVIDER must be one of {', '.join(CREDENTIAL_ENV)} (got {other!r})"
                )

        match gemini_models:
            case ():
                raise ValueError("GEMINI_MODELS must list at least one model")
            case _:
                pass

        match vision_timeout:
            case t if t <= 0:
                raise ValueError("VISION_TIMEOUT must be positive")
            case _:
                pass

        return Config(
            telegram_bot_token=telegram_bot_token,
            log_level=log_level,
            vision_provider=provider,
            vision_timeout=vision_timeout,
            anthropic_api_key=anthropic_api_key,
            gemini_api_key=gemini_api_key,
            openai_api_key=openai_api_key,
            claude_model=claude_model,
            openai_model=openai_model,
            gemini_models=gemini_models,
        )

    def credential_for(self, provider: str) -> Optional[str]:
        match provider:
            case "claude":
                return self.anthropic_api_key
            case "gemini":
                return self.gemini_api_key
            case "openai":
                return self.openai_api_key
            case _:
                return None

    @staticmethod
    def credential_env_for(provider: str) -> str:
        return CREDENTIAL_ENV.get(provider, "API_KEY")

    def model_label(self) -> str:
        match self.vision_provider:
            case "claude":
                return self.claude_model
            case "gemini":
                return " → ".join(self.gemini_models)
            case _:
                return self.openai_model


def _pick_provider(
    anthropic_api_key: Optional[str],
    gemini_api_key: Optional[str],
    openai_api_key: Optional[str],
) -> str:
    """First provider with a key, in the order claude, gemini, openai."""
    match (anthropic_api_key, gemini_api_key, openai_api_key):
        case (str() as k, _, _) if k:
            return PROVIDER_CLAUDE
        case (_, str() as k, _) if k:
            return PROVIDER_GEMINI
        case (_, _, str() as k) if k:
            return PROVIDER_OPENAI
        case _:
            return DEFAULT_PROVIDER
