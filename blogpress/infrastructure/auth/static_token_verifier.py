"""Token verifier backed by a static token → owner map from settings.

Token issuance lives outside this service; deployments that front it with
an identity provider swap in another TokenVerifier implementation.
"""

import hmac

from blogpress.application.interfaces import TokenVerifier


class StaticTokenVerifier(TokenVerifier):
    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    async def verify(self, token: str) -> str | None:
        token = token.strip()
        if not token:
            return None
        for known, owner_id in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return owner_id
        return None


def token_from_header(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None
