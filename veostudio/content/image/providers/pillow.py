"""
Image processed with Pillow.
"""

__all__ = ["Pillow"]


import base64
import os
from io import BytesIO
from typing import Any

from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from PIL.Image import Image

from veostudio.core import Context, Provider
from veostudio.core.exceptions import BadRequestError

from .._models import ImageData

PASSTHROUGH_FORMATS = {"JPEG", "PNG", "WEBP"}


class Pillow(Provider):
    _init: bool
    _image: Image
    _raw: bytes

    def __init__(self, **kwargs):
        """Intialize."""
        self._init = False
        self._raw = b""

    def __setup__(self, context: Context | None = None) -> None:
        if self._init:
            return
        component = self.__component__
        if isinstance(component.content, bytes):
            self._raw = component.content
        elif isinstance(component.content, str):
            self._raw = base64.b64decode(component.content)
        elif component.source:
            with open(component.source, "rb") as f:
                self._raw = f.read()
        else:
            raise BadRequestError("Image not initialized.")
        try:
            self._image = PILImage.open(BytesIO(self._raw))
            self._image.load()
        except UnidentifiedImageError as e:
            raise BadRequestError(
                f"{component.source or 'Content'} is not an image."
            ) from e
        self._init = True

    def get_data(self) -> ImageData:
        self.__setup__()
        format = (self._image.format or "").upper()
        if format in PASSTHROUGH_FORMATS:
            content = base64.b64encode(self._raw).decode("utf-8")
        else:
            format = "PNG"
            content = self.convert(type="base64", format=format)
        source = self.__component__.source
        return ImageData(
            source=os.path.basename(source) if source else None,
            content=content,
            media_type=PILImage.MIME.get(format, "image/png"),
        )

    def convert(self, type: str, format: str | None = None) -> Any:
        self.__setup__()
        if type == "pil":
            return self._image
        format = (format or self._image.format or "PNG").upper()
        byte_io = BytesIO()
        image = self._image
        if format == "JPEG" and image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(byte_io, format=format)
        if type == "bytes":
            return byte_io.getvalue()
        elif type == "base64":
            return base64.b64encode(byte_io.getvalue()).decode("utf-8")
        raise BadRequestError(f"Type {type} not supported")
