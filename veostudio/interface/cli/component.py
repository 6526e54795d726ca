from typing import Any

from veostudio.core import Component


class CLI(Component):
    studio: Any

    def __init__(self, studio: Any = None, **kwargs):
        """Initialize.

        Args:
            studio: The studio controller driven by the shell.
        """
        self.studio = studio
        kwargs.setdefault("__provider__", "default")
        super().__init__(**kwargs)
