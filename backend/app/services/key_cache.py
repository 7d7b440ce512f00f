"""Key cache - provider credentials from the database with a short TTL."""

import time
from collections.abc import Callable

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.db.repositories import CredentialRepository
from app.errors import KeysUnavailableError

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class KeyCache:
    """
    Snapshot of active provider credentials.

    The snapshot and its expiry are replaced together, so readers see either
    the previous or the fresh mapping, never a mix. A failed refresh leaves
    the previous snapshot in place but it is not served once expired.
    """

    def __init__(
        self,
        credentials: CredentialRepository,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._credentials = credentials
        self._ttl = ttl_seconds
        self._clock = clock
        self._state: tuple[dict[str, str], float] | None = None

    @property
    def is_fresh(self) -> bool:
        state = self._state
        return state is not None and self._clock() < state[1]

    async def get_keys(self) -> dict[str, str]:
        """Mapping of provider -> secret for active credentials."""
        state = self._state
        if state is not None and self._clock() < state[1]:
            return dict(state[0])

        try:
            rows = await self._credentials.list_active()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to fetch API keys", error=str(e))
            raise KeysUnavailableError("API keys not available") from e

        # Rows are oldest first, so the newest active credential per provider wins.
        keys = {row.provider: row.secret for row in rows}
        self._state = (keys, self._clock() + self._ttl)
        logger.debug("API key cache refreshed", providers=sorted(keys))
        return dict(keys)

    async def get_key(self, provider: str) -> str | None:
        keys = await self.get_keys()
        return keys.get(provider) or None

    def invalidate(self) -> None:
        """Drop the snapshot; the next read refetches."""
        self._state = None
