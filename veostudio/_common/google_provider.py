import os

from veostudio.core import Provider
from veostudio.core.exceptions import UnauthorizedError

API_KEY_VARIABLES = ("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY")


class GoogleProvider(Provider):
    api_key: str | None

    def __init__(
        self,
        api_key: str | None = None,
        **kwargs,
    ):
        self.api_key = api_key
        super().__init__(**kwargs)

    def _get_api_key(self) -> str:
        # Resolved per call so a key selected mid-session is picked up.
        if self.api_key:
            return self.api_key
        for variable in API_KEY_VARIABLES:
            value = os.environ.get(variable)
            if value:
                return value
        raise UnauthorizedError(
            "API key not valid. Set one of "
            f"{', '.join(API_KEY_VARIABLES)} or select a key."
        )

    def _get_headers(self) -> dict[str, str]:
        return {
            "x-goog-api-key": self._get_api_key(),
            "Content-Type": "application/json",
        }
