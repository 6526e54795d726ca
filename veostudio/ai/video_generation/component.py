from typing import Any

from veostudio.core import Component, Response, operation

from ._models import GenerateVideoParams, VideoGenerationResult


class VideoGeneration(Component):
    @operation()
    def generate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        """
        Generate a video and wait for it to complete.

        Args:
            params:
                The composed generation request. The mode decides which
                attachments are sent.

        Returns:
            The playable video, its raw bytes and its remote handle.

        Raises:
            BaseError: The service rejected the request or the
                operation failed.
        """
        raise NotImplementedError

    @operation()
    async def agenerate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        """
        Generate a video and wait for it to complete.

        Args:
            params:
                The composed generation request. The mode decides which
                attachments are sent.

        Returns:
            The playable video, its raw bytes and its remote handle.

        Raises:
            BaseError: The service rejected the request or the
                operation failed.
        """
        raise NotImplementedError
