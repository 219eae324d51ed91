"""TDD: Config tests written FIRST"""
import pytest
from agriscan.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("agriscan.config.load_dotenv", lambda **_: None)
    for var in (
        "VISION_PROVIDER",
        "VISION_TIMEOUT",
        "ANTHROPIC_API_KEY",
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "GEMINI_MODELS",
        "CLAUDE_VISION_MODEL",
        "OPENAI_VISION_MODEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "bot123:ABC")


def test_config_from_env_success():
    """Happy-path: token present, everything else defaulted."""
    config = Config.from_env()

    assert config.telegram_bot_token == "bot123:ABC"
    assert config.log_level == "INFO"
    assert config.vision_timeout == 60.0


def test_config_missing_token_fails(monkeypatch):
    """Missing TELEGRAM_BOT_TOKEN must raise."""
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        Config.from_env()


def test_config_immutable():
    """Frozen dataclass: attribute assignment must fail."""
    config = Config(
        telegram_bot_token="token",
        log_level="INFO",
        vision_provider="claude",
        vision_timeout=60.0,
        anthropic_api_key=None,
        gemini_api_key=None,
        openai_api_key=None,
    )

    with pytest.raises(Exception):
        config.vision_provider = "gemini"


def test_provider_defaults_to_claude_without_keys():
    config = Config.from_env()

    assert config.vision_provider == "claude"
    assert config.credential_for("claude") is None


def test_provider_picks_first_configured_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = Config.from_env()

    assert config.vision_provider == "gemini"
    assert config.credential_for("gemini") == "g-key"


def test_explicit_provider_wins_over_keys(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
    monkeypatch.setenv("VISION_PROVIDER", "OpenAI")

    config = Config.from_env()

    assert config.vision_provider == "openai"
    assert config.credential_for("openai") is None


def test_unknown_provider_fails(monkeypatch):
    monkeypatch.setenv("VISION_PROVIDER", "llava")

    with pytest.raises(ValueError, match="VISION_PROVIDER"):
        Config.from_env()


def test_gemini_models_parse_in_order(monkeypatch):
    monkeypatch.setenv("GEMINI_MODELS", " gemini-3-flash , gemini-2.5-flash,, ")

    config = Config.from_env()

    assert config.gemini_models == ("gemini-3-flash", "gemini-2.5-flash")


def test_gemini_models_default_order():
    config = Config.from_env()

    assert config.gemini_models[0] == "gemini-2.5-flash"
    assert len(config.gemini_models) == 3


def test_empty_gemini_models_fails(monkeypatch):
    monkeypatch.setenv("GEMINI_MODELS", " , ")

    with pytest.raises(ValueError, match="GEMINI_MODELS"):
        Config.from_env()


def test_vision_timeout_from_env(monkeypatch):
    monkeypatch.setenv("VISION_TIMEOUT", "12.5")

    assert Config.from_env().vision_timeout == 12.5


def test_non_positive_timeout_fails(monkeypatch):
    monkeypatch.setenv("VISION_TIMEOUT", "0")

    with pytest.raises(ValueError, match="VISION_TIMEOUT"):
        Config.from_env()


def test_blank_api_key_becomes_none(monkeypatch):
    """Blank ANTHROPIC_API_KEY → None (treated as not configured)."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")

    assert Config.from_env().anthropic_api_key is None


def test_credential_env_names():
    assert Config.credential_env_for("claude") == "ANTHROPIC_API_KEY"
    assert Config.credential_env_for("gemini") == "GEMINI_API_KEY"
    assert Config.credential_env_for("openai") == "OPENAI_API_KEY"


def test_model_overrides_from_env(monkeypatch):
    monkeypatch.setenv("CLAUDE_VISION_MODEL", "claude-opus-4-6")
    monkeypatch.setenv("OPENAI_VISION_MODEL", "gpt-4.1")

    config = Config.from_env()

    assert config.claude_model == "claude-opus-4-6"
    assert config.openai_model == "gpt-4.1"
    assert config.model_label() == "claude-opus-4-6"
