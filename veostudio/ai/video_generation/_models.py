import os
from enum import Enum

from veostudio.content.image import ImageData
from veostudio.content.video import VideoData
from veostudio.core import DataModel, DataModelField


class VeoModel(str, Enum):
    VEO_FAST = "veo-3.1-fast-generate-preview"
    VEO = "veo-3.1-generate-preview"


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(str, Enum):
    P720 = "720p"
    P1080 = "1080p"


class GenerationMode(str, Enum):
    TEXT_TO_VIDEO = "Text to Video"
    FRAMES_TO_VIDEO = "Frames to Video"
    REFERENCES_TO_VIDEO = "References to Video"
    EXTEND_VIDEO = "Extend Video"


MAX_REFERENCE_IMAGES = 3
EXTENDABLE_RESOLUTION = Resolution.P720


class RemoteVideo(DataModel):
    """Handle of a video stored by the generation service."""

    uri: str
    media_type: str | None = None


class GenerateVideoParams(DataModel):
    prompt: str = ""
    """Text prompt."""

    model: VeoModel = VeoModel.VEO_FAST
    """Model used for the generation."""

    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    """Aspect ratio of the output."""

    resolution: Resolution = Resolution.P720
    """Resolution of the output."""

    mode: GenerationMode = GenerationMode.TEXT_TO_VIDEO
    """Generation workflow."""

    start_frame: ImageData | None = None
    """First frame, frames mode."""

    end_frame: ImageData | None = None
    """Last frame, frames mode. Ignored when looping."""

    reference_images: list[ImageData] = DataModelField(
        default_factory=list, max_length=MAX_REFERENCE_IMAGES
    )
    """Asset references, references mode."""

    style_image: ImageData | None = None
    """Style reference, references mode."""

    input_video: VideoData | None = None
    """Video to extend, extend mode."""

    input_video_object: RemoteVideo | None = None
    """Remote handle of the video to extend, extend mode."""

    is_looping: bool = False
    """Use the start frame as the last frame, frames mode."""


class VideoGenerationResult(DataModel):
    playable: str
    """Path of a temporary file holding the video."""

    video: VideoData
    """Raw video bytes and media type."""

    handle: RemoteVideo
    """Remote handle, used to extend the video."""

    def release(self) -> None:
        """Delete the temporary playable file."""
        if self.playable and os.path.exists(self.playable):
            os.remove(self.playable)
