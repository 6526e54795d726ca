from ._models import (
    EXTENDABLE_RESOLUTION,
    MAX_REFERENCE_IMAGES,
    AspectRatio,
    GenerateVideoParams,
    GenerationMode,
    ImageData,
    RemoteVideo,
    Resolution,
    VeoModel,
    VideoData,
    VideoGenerationResult,
)
from .component import VideoGeneration

__all__ = [
    "AspectRatio",
    "EXTENDABLE_RESOLUTION",
    "GenerateVideoParams",
    "GenerationMode",
    "ImageData",
    "MAX_REFERENCE_IMAGES",
    "RemoteVideo",
    "Resolution",
    "VeoModel",
    "VideoData",
    "VideoGeneration",
    "VideoGenerationResult",
]
