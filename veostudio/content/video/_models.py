import base64

from veostudio.core import DataModel


class VideoData(DataModel):
    source: str | None = None
    """File name or path of the video."""

    content: bytes | str | None = None
    """Content of the video, raw bytes or base64 string."""

    media_type: str | None = None
    """Media type of the video."""

    def get_bytes(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        if isinstance(self.content, str):
            return base64.b64decode(self.content)
        return b""
