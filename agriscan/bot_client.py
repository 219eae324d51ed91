"""Abstract interfaces for transport-agnostic scan bots."""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from agriscan.diagnosis import AnalysisOutcome, ImageInput

# on_image signature: (image) -> outcome
OnImage = Callable[[Optional[ImageInput]], Awaitable[AnalysisOutcome]]


class ActivityIndicator(ABC):
    """Shown while a scan is in flight."""

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...


class BotClient(ABC):
    @abstractmethod
    def run(
        self,
        on_image: OnImage,
        on_status: Callable[[], str] | None = None,
    ) -> None: ...

    @abstractmethod
    async def send_message(self, to: str, text: str) -> bool: ...
