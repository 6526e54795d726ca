from __future__ import annotations

from typing import Any

from veostudio.core import Component, operation

from ._models import ImageData


class Image(Component):
    """Image attached to a generation request.

    Frames, references and style images are read through this component
    and sent to the service as base64 payloads.
    """

    source: str | None
    content: bytes | str | None

    def __init__(
        self,
        source: str | None = None,
        content: bytes | str | None = None,
        data: ImageData | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            source: Path of the image file.
            content: Raw bytes or a base64 string.
            data: Attachment data read earlier.
        """
        self.source = data.source if data else source
        self.content = data.content if data else content
        kwargs.setdefault("__provider__", "pillow")
        super().__init__(**kwargs)

    @operation()
    def get_data(self) -> ImageData:
        """Read the image as an attachment.

        Formats the service accepts are passed through unchanged, others
        are re-encoded as PNG.

        Returns:
            Base64 content, media type and file name.
        """
        ...

    @operation()
    def convert(self, type: str, format: str | None = None) -> Any:
        """Re-encode the image.

        Args:
            type: "bytes", "base64" or "pil".
            format: "JPEG", "PNG" or "WEBP". Keeps the source format
                when omitted.
        """
        ...

    @operation()
    async def aget_data(self) -> ImageData:
        """Read the image as an attachment."""
        ...

    @staticmethod
    def load(image: str | ImageData) -> Image:
        if isinstance(image, ImageData):
            return Image(data=image)
        if isinstance(image, str):
            return Image(source=image)
        raise ValueError("Image data not valid.")

    @staticmethod
    async def aload(path: str) -> ImageData:
        """Read an image file into attachment data."""
        return await Image.load(path).aget_data()
