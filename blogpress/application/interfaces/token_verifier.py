"""Port for the authentication collaborator."""

from abc import ABC, abstractmethod


class TokenVerifier(ABC):
    """Maps a bearer token to a stable owner identifier."""

    @abstractmethod
    async def verify(self, token: str) -> str | None:
        """Return the owner id for ``token``, or None when it is invalid."""
        ...
