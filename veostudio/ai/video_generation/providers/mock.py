__all__ = ["Mock"]

import asyncio
import os
import tempfile
from typing import Any

from veostudio.core import Provider, Response
from veostudio.core.exceptions import InternalError

from .._models import (
    GenerateVideoParams,
    RemoteVideo,
    VideoData,
    VideoGenerationResult,
)


class Mock(Provider):
    content: bytes
    error: str | None
    delay: float
    output_dir: str | None
    calls: list[GenerateVideoParams]

    def __init__(
        self,
        content: bytes = b"\x00\x00\x00\x18ftypmp42",
        error: str | None = None,
        delay: float = 0.0,
        output_dir: str | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            content: Bytes returned as the generated video.
            error: When set, every call fails with this message.
            delay: Seconds to wait before answering.
            output_dir: Directory for the temporary playable files.
        """
        self.content = content
        self.error = error
        self.delay = delay
        self.output_dir = output_dir
        self.calls = []
        super().__init__(**kwargs)

    def generate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        self.calls.append(params)
        if self.error:
            raise InternalError(self.error)
        return Response(result=self._build_result())

    async def agenerate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        self.calls.append(params)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise InternalError(self.error)
        return Response(result=self._build_result())

    def _build_result(self) -> VideoGenerationResult:
        fd, path = tempfile.mkstemp(
            prefix="veo-mock-", suffix=".mp4", dir=self.output_dir
        )
        with os.fdopen(fd, "wb") as f:
            f.write(self.content)
        index = len(self.calls)
        return VideoGenerationResult(
            playable=path,
            video=VideoData(content=self.content, media_type="video/mp4"),
            handle=RemoteVideo(
                uri=f"mock://videos/{index}", media_type="video/mp4"
            ),
        )
