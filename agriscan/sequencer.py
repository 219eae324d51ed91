"""ScanSequencer — latest scan per chat wins."""
from collections import defaultdict


class ScanSequencer:
    """Tags each scan with a per-chat sequence number.

    In-flight scans are never cancelled; a result whose number is no longer
    the latest for its chat is simply not shown.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = defaultdict(int)

    def begin(self, chat_id: str) -> int:
        self._latest[chat_id] += 1
        return self._latest[chat_id]

    def is_current(self, chat_id: str, seq: int) -> bool:
        return self._latest.get(chat_id) == seq
