from __future__ import annotations

import base64
import mimetypes
import os

from veostudio.core import Component, operation, run_async
from veostudio.core.exceptions import BadRequestError

from ._models import VideoData

VIDEO_EXTENSIONS = {".mp4", ".mov", ".webm", ".mkv", ".avi", ".m4v"}


class Video(Component):
    source: str | None
    content: bytes | str | None
    media_type: str | None

    def __init__(
        self,
        source: str | None = None,
        content: bytes | str | None = None,
        data: VideoData | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            source: Local path.
            content: Video bytes or base64 string.
            data: Video data.
        """
        self.source = source
        self.content = content
        self.media_type = None
        if data is not None:
            self.source = data.source
            self.content = data.content
            self.media_type = data.media_type
        super().__init__(**kwargs)

    @operation()
    def get_data(self) -> VideoData:
        """Get the video as base64 attachment data.

        Returns:
            Video data with base64 content and media type.
        """
        content = self._read()
        return VideoData(
            source=os.path.basename(self.source) if self.source else None,
            content=base64.b64encode(content).decode("utf-8"),
            media_type=self._media_type(),
        )

    @operation()
    def save(self, path: str, **kwargs) -> None:
        """Save video.

        Args:
            path: Local path.
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(self._read())

    @operation()
    async def aget_data(self) -> VideoData:
        """Get the video as base64 attachment data.

        Returns:
            Video data with base64 content and media type.
        """
        return await run_async(self.get_data)

    @operation()
    async def asave(self, path: str, **kwargs) -> None:
        """Save video.

        Args:
            path: Local path.
        """
        await run_async(self.save, path)

    def _read(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        if isinstance(self.content, str):
            return base64.b64decode(self.content)
        if self.source:
            _, ext = os.path.splitext(self.source)
            if ext.lower() not in VIDEO_EXTENSIONS:
                raise BadRequestError(f"{self.source} is not a video file.")
            with open(self.source, "rb") as f:
                return f.read()
        raise BadRequestError("Video data not provided.")

    def _media_type(self) -> str:
        if self.media_type:
            return self.media_type
        if self.source:
            guessed, _ = mimetypes.guess_type(self.source)
            if guessed:
                return guessed
        return "video/mp4"

    @staticmethod
    def load(video: str | VideoData) -> Video:
        if isinstance(video, str):
            return Video(source=video)
        elif isinstance(video, VideoData):
            return Video(data=video)
        raise ValueError("Video data not valid.")

    @staticmethod
    async def aload(path: str) -> VideoData:
        """Read a video file into attachment data."""
        return await Video.load(path).aget_data()
