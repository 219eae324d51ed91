"""Exceptions raised at the intake and request seams of a scan."""
from enum import Enum
from typing import Optional


class IntakeError(Exception):
    """Image or credential not usable; raised before any network I/O."""


class NoImageSelected(IntakeError):
    pass


class UnsupportedMediaType(IntakeError):
    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Not an image: {mime_type!r}")
        self.mime_type = mime_type


class MissingCredential(IntakeError):
    pass


class RequestErrorKind(str, Enum):
    TRANSPORT = "transport"
    REJECTED = "rejected"
    ALL_ENDPOINTS_EXHAUSTED = "all_endpoints_exhausted"


class RequestError(Exception):

    def __init__(self, kind: RequestErrorKind, detail: Optional[str] = None) -> None:
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind
        self.detail = detail
