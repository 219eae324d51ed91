"""Image intake — validates the image and credential, encodes the bytes."""
import base64
import logging
from typing import Optional

from agriscan.constants import IMAGE_MIME_PREFIX
from agriscan.diagnosis import EncodedImage, ImageInput
from agriscan.errors import MissingCredential, NoImageSelected, UnsupportedMediaType

logger = logging.getLogger(__name__)


def encode_image(image: ImageInput) -> EncodedImage:
    data = base64.standard_b64encode(image.data).decode()
    return EncodedImage(data=data, mime_type=image.mime_type)


def prepare(image: Optional[ImageInput], credential: Optional[str]) -> EncodedImage:
    """Return the base64 form of ``image``. Raises IntakeError before any request is built."""
    match image:
        case None:
            raise NoImageSelected("No image provided")
        case ImageInput(data=b""):
            raise NoImageSelected("Image is empty")
        case ImageInput(mime_type=mime) if not (mime or "").lower().startswith(IMAGE_MIME_PREFIX):
            raise UnsupportedMediaType(mime)
        case _:
            pass

    match credential:
        case None | "":
            raise MissingCredential("No API key configured")
        case _:
            pass

    encoded = encode_image(image)
    logger.debug("Encoded %d bytes of %s", len(image.data), image.mime_type)
    return encoded
