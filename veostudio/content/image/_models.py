from veostudio.core import DataModel


class ImageData(DataModel):
    source: str | None = None
    """File name or path the image was read from."""

    content: bytes | str | None = None
    """Image bytes or base64 string."""

    media_type: str | None = None
    """Media type of the image."""
