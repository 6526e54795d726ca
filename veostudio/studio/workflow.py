from __future__ import annotations

from loguru import logger

from veostudio.ai.video_generation import (
    EXTENDABLE_RESOLUTION,
    GenerateVideoParams,
    GenerationMode,
    VideoData,
    VideoGeneration,
    VideoGenerationResult,
)
from veostudio.core import Response, warn
from veostudio.core.exceptions import BadRequestError, ConflictError
from veostudio.interface.credential import Credential

from ._models import WorkflowSnapshot, WorkflowState
from .composer import check_request
from .errors import UNKNOWN_ERROR_MESSAGE, classify_error

EXTEND_VIDEO_NAME = "last_video.mp4"


class GenerationWorkflow:
    """Drives one generation request at a time.

    The workflow owns the single workflow state. Callers read it through
    ``snapshot()`` and change it only through the action methods. The
    Loading state doubles as the lock: no submission is accepted while a
    request is in flight.
    """

    generator: VideoGeneration
    credential: Credential | None

    _state: WorkflowState
    _error_message: str | None
    _result: VideoGenerationResult | None
    _last_config: GenerateVideoParams | None
    _initial_values: GenerateVideoParams | None
    _show_credential_prompt: bool

    def __init__(
        self,
        generator: VideoGeneration,
        credential: Credential | None = None,
    ):
        self.generator = generator
        self.credential = credential
        self._state = WorkflowState.IDLE
        self._error_message = None
        self._result = None
        self._last_config = None
        self._initial_values = None
        self._show_credential_prompt = False

    @property
    def state(self) -> WorkflowState:
        return self._state

    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            state=self._state,
            error_message=self._error_message,
            result=self._result,
            last_config=self._last_config,
            initial_values=self._initial_values,
            can_extend=self.can_extend(),
            show_credential_prompt=self._show_credential_prompt,
        )

    def can_extend(self) -> bool:
        return (
            self._state == WorkflowState.SUCCESS
            and self._result is not None
            and self._last_config is not None
            and self._last_config.resolution == EXTENDABLE_RESOLUTION
        )

    async def start(self) -> WorkflowSnapshot:
        """Check for a credential on start up."""
        await self._check_credential()
        return self.snapshot()

    async def submit(self, params: GenerateVideoParams) -> WorkflowSnapshot:
        """Generate a video for the request.

        Raises:
            ConflictError: A request is already in flight.
            BadRequestError: The request misses an input its mode requires.
        """
        if self._state == WorkflowState.LOADING:
            raise ConflictError("A video is already being generated.")
        if self._state != WorkflowState.IDLE:
            raise BadRequestError("Start a new video before submitting.")
        return await self._generate(params)

    async def regenerate(self) -> WorkflowSnapshot:
        """Submit the last request again, unchanged."""
        if self._state == WorkflowState.LOADING:
            raise ConflictError("A video is already being generated.")
        if self._last_config is None:
            raise BadRequestError("There is no request to regenerate.")
        return await self._generate(self._last_config)

    async def _generate(
        self, params: GenerateVideoParams
    ) -> WorkflowSnapshot:
        gate = check_request(params)
        if gate.disabled:
            raise BadRequestError(gate.tooltip)

        # Claimed before the first await so a concurrent submit conflicts.
        previous_state = self._state
        self._state = WorkflowState.LOADING
        try:
            has_credential = await self._check_credential()
        except BaseException:
            self._state = previous_state
            raise
        if not has_credential:
            self._state = previous_state
            return self.snapshot()

        self._release_result()
        self._error_message = None
        self._last_config = params
        self._initial_values = None
        logger.info(
            "Generating video: mode={}, model={}, resolution={}",
            params.mode.value,
            params.model.value,
            params.resolution.value,
        )

        try:
            response: Response[VideoGenerationResult] = (
                await self.generator.agenerate(params=params)
            )
        except Exception as e:
            logger.exception("Video generation failed")
            classification = classify_error(e)
            self._error_message = classification.message
            self._state = WorkflowState.ERROR
            if classification.reauthenticate:
                self._show_credential_prompt = True
            return self.snapshot()

        self._result = response.result
        self._state = WorkflowState.SUCCESS
        logger.info("Video generated at {}", self._result.playable)
        return self.snapshot()

    async def continue_with_credential(self) -> WorkflowSnapshot:
        """Open the credential selector, then retry a failed request."""
        self._show_credential_prompt = False
        if self.credential is not None:
            await self.credential.aselect()
        if (
            self._state == WorkflowState.ERROR
            and self._last_config is not None
        ):
            return await self.regenerate()
        return self.snapshot()

    def dismiss_credential_prompt(self) -> WorkflowSnapshot:
        self._show_credential_prompt = False
        return self.snapshot()

    def new_video(self) -> WorkflowSnapshot:
        """Discard the result and the last request."""
        self._guard_not_loading()
        self._release_result()
        self._state = WorkflowState.IDLE
        self._error_message = None
        self._last_config = None
        self._initial_values = None
        return self.snapshot()

    def try_again(self) -> WorkflowSnapshot:
        """Go back to the composer with the failed request restored."""
        self._guard_not_loading()
        if self._last_config is None:
            return self.new_video()
        self._initial_values = self._last_config
        self._state = WorkflowState.IDLE
        self._error_message = None
        return self.snapshot()

    def extend(self) -> WorkflowSnapshot:
        """Seed an extend request that continues the last video.

        Raises:
            BadRequestError: The last video cannot be extended.
        """
        if not self.can_extend():
            raise BadRequestError(
                "Only a generated 720p video can be extended."
            )
        result = self._result
        last_config = self._last_config
        if result is None or last_config is None:
            raise BadRequestError("There is no video to extend.")
        try:
            video = VideoData(
                source=EXTEND_VIDEO_NAME,
                content=result.video.get_bytes(),
                media_type=result.video.media_type or "video/mp4",
            )
        except ValueError as e:
            logger.error("Failed to process video for extension: {}", e)
            return self._fail("Failed to prepare video for extension")
        self._initial_values = last_config.copy(
            update=dict(
                mode=GenerationMode.EXTEND_VIDEO,
                prompt="",
                input_video=video,
                input_video_object=result.handle,
                resolution=EXTENDABLE_RESOLUTION,
                start_frame=None,
                end_frame=None,
                reference_images=[],
                style_image=None,
                is_looping=False,
            )
        )
        self._release_result()
        self._state = WorkflowState.IDLE
        self._error_message = None
        return self.snapshot()

    async def _check_credential(self) -> bool:
        if self.credential is None:
            return True
        try:
            if await self.credential.ahas_credential():
                return True
        except Exception as e:
            warn("Credential check failed, assuming no key selected: {}", e)
        self._show_credential_prompt = True
        return False

    def _guard_not_loading(self) -> None:
        if self._state == WorkflowState.LOADING:
            raise ConflictError("A video is being generated.")

    def _release_result(self) -> None:
        if self._result is None:
            return
        try:
            self._result.release()
        except OSError as e:
            warn("Unable to release {}: {}", self._result.playable, e)
        self._result = None

    def _fail(self, message: str | None) -> WorkflowSnapshot:
        self._error_message = message or UNKNOWN_ERROR_MESSAGE
        self._state = WorkflowState.ERROR
        return self.snapshot()
