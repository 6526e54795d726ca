from veostudio.core import Component, operation


class Credential(Component):
    """Host credential for the video generation service."""

    @operation()
    def has_credential(self) -> bool:
        """Check whether a credential is selected.

        Returns:
            True if a credential is available.
        """
        ...

    @operation()
    def select(self) -> None:
        """Open the credential selector."""
        ...

    @operation()
    async def ahas_credential(self) -> bool:
        """Check whether a credential is selected.

        Returns:
            True if a credential is available.
        """
        ...

    @operation()
    async def aselect(self) -> None:
        """Open the credential selector."""
        ...
