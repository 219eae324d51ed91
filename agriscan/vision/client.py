"""VisionClient — abstract base for diagnosis backends."""
from abc import ABC, abstractmethod

from agriscan.diagnosis import DiagnosisRequest, Vendor, VendorEnvelope


class VisionClient(ABC):
    vendor: Vendor

    @abstractmethod
    async def request(self, request: DiagnosisRequest) -> VendorEnvelope:
        """Submit the image and prompt, return the vendor's raw response. Raises RequestError."""
        ...
