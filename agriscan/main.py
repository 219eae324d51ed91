"""Entry point — wires Config → PlantAnalyzer → TelegramClient."""
import logging

from rich.logging import RichHandler

from agriscan.analyzer import PlantAnalyzer, build_analyzer
from agriscan.config import Config
from agriscan.constants import MSG_BOT_STARTING, MSG_PROVIDER_SELECTED, MSG_STATUS
from agriscan.telegram.client import TelegramClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))
    # httpx logs full request URLs, which carry the Gemini key
    logging.getLogger("httpx").setLevel(logging.WARNING)


def status_text(config: Config, analyzer: PlantAnalyzer) -> str:
    key = "configured" if analyzer.has_credential else f"missing ({config.credential_env_for(analyzer.provider)})"
    return MSG_STATUS % (analyzer.provider, config.model_label(), key, f"{config.vision_timeout:g}")


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)

    analyzer = build_analyzer(config)
    logger.info(MSG_PROVIDER_SELECTED, analyzer.provider)

    client = TelegramClient(config)
    client.run(
        analyzer.analyze,
        on_status=lambda: status_text(config, analyzer),
    )


if __name__ == "__main__":
    main()
