from ._models import ImageData
from .component import Image

__all__ = ["Image", "ImageData"]
