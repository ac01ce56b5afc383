"""Caller identity resolution."""
import abc
import hmac
import logging

from src.shared.exceptions import Unauthenticated

logger = logging.getLogger(__name__)


class AuthProvider(abc.ABC):
    """Resolves the caller behind a request credential."""

    @abc.abstractmethod
    async def get_current_user_id(self, token: str | None) -> str | None:
        """Return the caller's user ID, or None when the credential is missing or unknown."""

    async def require_user_id(self, token: str | None) -> str:
        user_id = await self.get_current_user_id(token)
        if user_id is None:
            raise Unauthenticated()
        return user_id


class StaticTokenAuthProvider(AuthProvider):
    """Accepts a fixed set of bearer tokens, each mapped to a user ID."""

    def __init__(self, api_tokens: dict[str, str]):
        self._api_tokens = dict(api_tokens)

    async def get_current_user_id(self, token: str | None) -> str | None:
        if not token:
            return None
        for known_token, user_id in self._api_tokens.items():
            if hmac.compare_digest(known_token, token):
                return user_id
        logger.warning("Rejected unknown API token")
        return None
