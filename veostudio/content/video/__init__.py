from ._models import VideoData
from .component import Video

__all__ = ["Video", "VideoData"]
