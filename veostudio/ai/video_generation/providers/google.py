"""
Veo video generation through the Gemini API.
"""

__all__ = ["Google"]

import asyncio
import base64
import json
import os
import tempfile
import time
from typing import Any

import httpx
from loguru import logger

from veostudio._common.google_provider import GoogleProvider
from veostudio.content.image import ImageData
from veostudio.core import Response
from veostudio.core.exceptions import (
    BadRequestError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)

from .._models import (
    EXTENDABLE_RESOLUTION,
    GenerateVideoParams,
    GenerationMode,
    RemoteVideo,
    VideoData,
    VideoGenerationResult,
)

BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_status_errors: dict[int, type[Exception]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}

# google.rpc.Code values reported inside long running operations
_rpc_errors: dict[int, type[Exception]] = {
    3: BadRequestError,
    5: NotFoundError,
    7: ForbiddenError,
    16: UnauthorizedError,
}


class Google(GoogleProvider):
    model: str | None
    base_url: str
    poll_interval: float
    timeout: float
    output_dir: str | None
    nparams: dict[str, Any] | None

    _transport: Any

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str = BASE_URL,
        poll_interval: float = 10.0,
        timeout: float = 60.0,
        output_dir: str | None = None,
        nparams: dict[str, Any] | None = None,
        transport: Any = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            api_key:
                Gemini API key. Falls back to the environment.
            model:
                Model that overrides the one in the request.
            base_url:
                Gemini API base url.
            poll_interval:
                Seconds between operation polls.
            timeout:
                Per request HTTP timeout in seconds.
            output_dir:
                Directory for the temporary playable files.
            nparams:
                Native parameters merged into the request parameters.
            transport:
                httpx transport, used by tests.
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.output_dir = output_dir
        self.nparams = nparams
        self._transport = transport
        super().__init__(api_key=api_key, **kwargs)

    def generate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        body = self._convert_generate_args(params)
        headers = self._get_headers()
        with httpx.Client(
            transport=self._transport, timeout=self.timeout
        ) as client:
            res = client.post(
                self._get_generate_url(params), json=body, headers=headers
            )
            operation = self._check_response(res).json()
            logger.info("Started video operation {}", operation.get("name"))
            while not operation.get("done"):
                time.sleep(self.poll_interval)
                res = client.get(
                    self._get_poll_url(operation), headers=headers
                )
                operation = self._check_response(res).json()
                logger.debug("Polled {}", operation.get("name"))
            handle = self._parse_operation(operation)
            res = client.get(
                handle.uri, headers=headers, follow_redirects=True
            )
            content = self._check_response(res).content
        return Response(
            result=self._build_result(handle, content),
            native=dict(operation=operation),
        )

    async def agenerate(
        self,
        params: GenerateVideoParams,
        **kwargs: Any,
    ) -> Response[VideoGenerationResult]:
        body = self._convert_generate_args(params)
        headers = self._get_headers()
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.timeout
        ) as client:
            res = await client.post(
                self._get_generate_url(params), json=body, headers=headers
            )
            operation = self._check_response(res).json()
            logger.info("Started video operation {}", operation.get("name"))
            while not operation.get("done"):
                await asyncio.sleep(self.poll_interval)
                res = await client.get(
                    self._get_poll_url(operation), headers=headers
                )
                operation = self._check_response(res).json()
                logger.debug("Polled {}", operation.get("name"))
            handle = self._parse_operation(operation)
            res = await client.get(
                handle.uri, headers=headers, follow_redirects=True
            )
            content = self._check_response(res).content
        return Response(
            result=self._build_result(handle, content),
            native=dict(operation=operation),
        )

    def _convert_generate_args(
        self, params: GenerateVideoParams
    ) -> dict[str, Any]:
        instance: dict[str, Any] = {}
        parameters: dict[str, Any] = {"sampleCount": 1}
        if params.prompt.strip():
            instance["prompt"] = params.prompt
        if params.mode == GenerationMode.FRAMES_TO_VIDEO:
            if not params.start_frame:
                raise BadRequestError("A start frame is required.")
            instance["image"] = self._get_image(params.start_frame)
            if params.is_looping:
                instance["lastFrame"] = self._get_image(params.start_frame)
            elif params.end_frame:
                instance["lastFrame"] = self._get_image(params.end_frame)
        elif params.mode == GenerationMode.REFERENCES_TO_VIDEO:
            references = [
                {"image": self._get_image(image), "referenceType": "asset"}
                for image in params.reference_images
            ]
            if params.style_image:
                references.append(
                    {
                        "image": self._get_image(params.style_image),
                        "referenceType": "style",
                    }
                )
            instance["referenceImages"] = references
        elif params.mode == GenerationMode.EXTEND_VIDEO:
            if not params.input_video_object:
                raise BadRequestError("An input video is required to extend.")
            instance["video"] = {"uri": params.input_video_object.uri}

        if params.mode == GenerationMode.EXTEND_VIDEO:
            parameters["resolution"] = EXTENDABLE_RESOLUTION.value
        else:
            parameters["resolution"] = params.resolution.value
            parameters["aspectRatio"] = params.aspect_ratio.value
        if self.nparams:
            parameters.update(self.nparams)
        return {"instances": [instance], "parameters": parameters}

    def _get_generate_url(self, params: GenerateVideoParams) -> str:
        model = self.model or params.model.value
        return f"{self.base_url}/models/{model}:predictLongRunning"

    def _get_poll_url(self, operation: dict[str, Any]) -> str:
        return f"{self.base_url}/{operation['name']}"

    def _get_image(self, image: ImageData) -> dict[str, Any]:
        args: dict[str, Any] = {}
        if isinstance(image.content, str):
            args["bytesBase64Encoded"] = image.content
        elif isinstance(image.content, bytes):
            args["bytesBase64Encoded"] = base64.b64encode(
                image.content
            ).decode("utf-8")
        else:
            raise BadRequestError("Image data not provided.")
        args["mimeType"] = image.media_type or "image/png"
        return args

    def _check_response(self, res: httpx.Response) -> httpx.Response:
        if res.is_success:
            return res
        try:
            body: Any = res.json()
        except ValueError:
            body = res.text
        status = ""
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            status = body["error"].get("status", "")
        message = (
            f"got status: {res.status_code} {status}. "
            f"{json.dumps(body) if isinstance(body, dict) else body}"
        )
        raise _status_errors.get(res.status_code, InternalError)(message)

    def _parse_operation(self, operation: dict[str, Any]) -> RemoteVideo:
        error = operation.get("error")
        if error:
            exception = _rpc_errors.get(error.get("code", 0), InternalError)
            raise exception(error.get("message", "Unknown error"))
        response = operation.get("response", {}).get(
            "generateVideoResponse", {}
        )
        for sample in response.get("generatedSamples", []):
            video = sample.get("video") or {}
            if video.get("uri"):
                return RemoteVideo(
                    uri=video["uri"],
                    media_type=video.get("mimeType", "video/mp4"),
                )
        reasons = response.get("raiMediaFilteredReasons")
        if reasons:
            raise BadRequestError(" ".join(reasons))
        raise InternalError("No videos were generated.")

    def _build_result(
        self, handle: RemoteVideo, content: bytes
    ) -> VideoGenerationResult:
        if self.output_dir:
            os.makedirs(self.output_dir, exist_ok=True)
        fd, path = tempfile.mkstemp(
            prefix="veo-", suffix=".mp4", dir=self.output_dir
        )
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        return VideoGenerationResult(
            playable=path,
            video=VideoData(
                content=content, media_type=handle.media_type or "video/mp4"
            ),
            handle=handle,
        )
