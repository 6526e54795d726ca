from __future__ import annotations

from loguru import logger

from veostudio.ai.video_generation import (
    MAX_REFERENCE_IMAGES,
    AspectRatio,
    GenerateVideoParams,
    GenerationMode,
    ImageData,
    RemoteVideo,
    Resolution,
    VeoModel,
    VideoData,
)
from veostudio.content.image import Image
from veostudio.content.video import Video
from veostudio.core.exceptions import BadRequestError

from ._models import SubmitGate
from .presets import get_preset

PROMPT_REQUIRED = "Please enter a prompt."
START_FRAME_REQUIRED = "A start frame is required."
REFERENCES_AND_PROMPT_REQUIRED = "Add reference images and a prompt."
REFERENCE_REQUIRED = "At least one reference image is required."
INPUT_VIDEO_REQUIRED = "An input video is required to extend."

SELECTABLE_MODES = (
    GenerationMode.TEXT_TO_VIDEO,
    GenerationMode.FRAMES_TO_VIDEO,
    GenerationMode.REFERENCES_TO_VIDEO,
)


class RequestComposer:
    """Collects user input into a generation request.

    The composer owns a mutable working copy of the request. Mode switches
    clear every attachment, and the references and extend modes pin the
    controls the service does not let them vary.
    """

    params: GenerateVideoParams

    def __init__(self, initial_values: GenerateVideoParams | None = None):
        self.params = GenerateVideoParams()
        if initial_values is not None:
            self.seed(initial_values)

    def seed(self, values: GenerateVideoParams) -> None:
        self.params = values.copy(deep=True)
        self._apply_mode_locks()

    def reset(self) -> None:
        self.params = GenerateVideoParams()

    @property
    def mode(self) -> GenerationMode:
        return self.params.mode

    @property
    def model_locked(self) -> bool:
        return self.params.mode == GenerationMode.REFERENCES_TO_VIDEO

    @property
    def format_locked(self) -> bool:
        return self.params.mode in (
            GenerationMode.REFERENCES_TO_VIDEO,
            GenerationMode.EXTEND_VIDEO,
        )

    def set_prompt(self, prompt: str) -> None:
        self.params.prompt = prompt

    def set_model(self, model: VeoModel | str) -> None:
        if self.model_locked:
            raise BadRequestError(
                f"Model is fixed in {self.params.mode.value}"
            )
        self.params.model = VeoModel(model)

    def set_aspect_ratio(self, aspect_ratio: AspectRatio | str) -> None:
        if self.format_locked:
            raise BadRequestError(
                f"Aspect ratio is fixed in {self.params.mode.value}"
            )
        self.params.aspect_ratio = AspectRatio(aspect_ratio)

    def set_resolution(self, resolution: Resolution | str) -> None:
        if self.format_locked:
            raise BadRequestError(
                f"Resolution is fixed in {self.params.mode.value}"
            )
        self.params.resolution = Resolution(resolution)

    def select_mode(self, mode: GenerationMode | str) -> None:
        self.params.mode = GenerationMode(mode)
        self._clear_attachments()
        self._apply_mode_locks()

    def apply_preset(self, preset_id: str) -> None:
        preset = get_preset(preset_id)
        self.params.prompt = preset.prompt
        self.select_mode(GenerationMode.TEXT_TO_VIDEO)

    def set_start_frame(self, image: ImageData) -> None:
        self._require_mode(GenerationMode.FRAMES_TO_VIDEO)
        self.params.start_frame = image

    def remove_start_frame(self) -> None:
        self.params.start_frame = None
        self.params.is_looping = False

    def set_end_frame(self, image: ImageData) -> None:
        self._require_mode(GenerationMode.FRAMES_TO_VIDEO)
        self.params.end_frame = image

    def remove_end_frame(self) -> None:
        self.params.end_frame = None

    def set_looping(self, looping: bool) -> None:
        self._require_mode(GenerationMode.FRAMES_TO_VIDEO)
        self.params.is_looping = looping

    def add_reference_image(self, image: ImageData) -> None:
        self._require_mode(GenerationMode.REFERENCES_TO_VIDEO)
        if len(self.params.reference_images) >= MAX_REFERENCE_IMAGES:
            raise BadRequestError(
                f"At most {MAX_REFERENCE_IMAGES} reference images allowed."
            )
        self.params.reference_images = [*self.params.reference_images, image]

    def remove_reference_image(self, index: int) -> None:
        if not 0 <= index < len(self.params.reference_images):
            raise BadRequestError(f"No reference image at {index}")
        self.params.reference_images = [
            image
            for i, image in enumerate(self.params.reference_images)
            if i != index
        ]

    def set_style_image(self, image: ImageData | None) -> None:
        self._require_mode(GenerationMode.REFERENCES_TO_VIDEO)
        self.params.style_image = image

    def remove_style_image(self) -> None:
        self.params.style_image = None

    def set_input_video(
        self, video: VideoData, handle: RemoteVideo | None = None
    ) -> None:
        self._require_mode(GenerationMode.EXTEND_VIDEO)
        self.params.input_video = video
        self.params.input_video_object = handle

    def remove_input_video(self) -> None:
        self.params.input_video = None
        self.params.input_video_object = None

    async def attach_start_frame(self, path: str) -> bool:
        self._require_mode(GenerationMode.FRAMES_TO_VIDEO)
        image = await self._aload_image(path)
        if image is None:
            return False
        self.set_start_frame(image)
        return True

    async def attach_end_frame(self, path: str) -> bool:
        self._require_mode(GenerationMode.FRAMES_TO_VIDEO)
        image = await self._aload_image(path)
        if image is None:
            return False
        self.set_end_frame(image)
        return True

    async def attach_reference_image(self, path: str) -> bool:
        self._require_mode(GenerationMode.REFERENCES_TO_VIDEO)
        image = await self._aload_image(path)
        if image is None:
            return False
        self.add_reference_image(image)
        return True

    async def attach_style_image(self, path: str) -> bool:
        self._require_mode(GenerationMode.REFERENCES_TO_VIDEO)
        image = await self._aload_image(path)
        if image is None:
            return False
        self.set_style_image(image)
        return True

    async def attach_input_video(self, path: str) -> bool:
        self._require_mode(GenerationMode.EXTEND_VIDEO)
        try:
            video = await Video.aload(path)
        except (OSError, BadRequestError) as e:
            logger.error("Error converting file {}: {}", path, e)
            return False
        self.set_input_video(video)
        return True

    def gate(self) -> SubmitGate:
        """Check whether the request can be submitted."""
        params = self.params
        has_prompt = bool(params.prompt.strip())
        if params.mode == GenerationMode.TEXT_TO_VIDEO:
            if not has_prompt:
                return SubmitGate(disabled=True, tooltip=PROMPT_REQUIRED)
        elif params.mode == GenerationMode.FRAMES_TO_VIDEO:
            if not params.start_frame:
                return SubmitGate(disabled=True, tooltip=START_FRAME_REQUIRED)
        elif params.mode == GenerationMode.REFERENCES_TO_VIDEO:
            has_refs = len(params.reference_images) > 0
            if not has_refs and not has_prompt:
                return SubmitGate(
                    disabled=True, tooltip=REFERENCES_AND_PROMPT_REQUIRED
                )
            if not has_refs:
                return SubmitGate(disabled=True, tooltip=REFERENCE_REQUIRED)
            if not has_prompt:
                return SubmitGate(disabled=True, tooltip=PROMPT_REQUIRED)
        elif params.mode == GenerationMode.EXTEND_VIDEO:
            if not params.input_video_object:
                return SubmitGate(disabled=True, tooltip=INPUT_VIDEO_REQUIRED)
        return SubmitGate()

    def submit(self) -> GenerateVideoParams:
        gate = self.gate()
        if gate.disabled:
            raise BadRequestError(gate.tooltip)
        return self.params.copy(deep=True)

    def _clear_attachments(self) -> None:
        self.params.start_frame = None
        self.params.end_frame = None
        self.params.reference_images = []
        self.params.style_image = None
        self.params.input_video = None
        self.params.input_video_object = None
        self.params.is_looping = False

    def _apply_mode_locks(self) -> None:
        if self.params.mode == GenerationMode.REFERENCES_TO_VIDEO:
            self.params.model = VeoModel.VEO
            self.params.aspect_ratio = AspectRatio.LANDSCAPE
            self.params.resolution = Resolution.P720
        elif self.params.mode == GenerationMode.EXTEND_VIDEO:
            self.params.resolution = Resolution.P720

    def _require_mode(self, mode: GenerationMode) -> None:
        if self.params.mode != mode:
            raise BadRequestError(
                f"Switch to {mode.value} to use this attachment."
            )

    async def _aload_image(self, path: str) -> ImageData | None:
        try:
            return await Image.aload(path)
        except (OSError, BadRequestError) as e:
            logger.error("Error converting file {}: {}", path, e)
            return None


def check_request(params: GenerateVideoParams) -> SubmitGate:
    """Gate a request built outside a composer."""
    composer = RequestComposer()
    composer.params = params
    return composer.gate()
