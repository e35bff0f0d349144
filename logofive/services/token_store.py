"""Token store — where paid, not-yet-used access tokens live.

Membership means "payment confirmed, generation not yet used".

Backends:
- MemoryTokenStore: a plain set, lost on restart. Default.
- RedisTokenStore: one key per token, shared by every instance pointed
  at the same TOKEN_STORE_URL.

There is no expiry: a paid token that is never used stays valid.
"""

import logging
from urllib.parse import urlsplit

from flask import current_app

logger = logging.getLogger(__name__)

EXTENSION_KEY = "token_store"


class TokenStore:
    """Capability every backend implements."""

    def contains(self, token: str) -> bool:
        raise NotImplementedError

    def insert(self, token: str) -> None:
        raise NotImplementedError

    def remove(self, token: str) -> None:
        """Remove the token. Removing an absent token is a no-op."""
        raise NotImplementedError


class MemoryTokenStore(TokenStore):
    """Process-lifetime set of tokens."""

    def __init__(self):
        self._tokens = set()

    def contains(self, token: str) -> bool:
        return token in self._tokens

    def insert(self, token: str) -> None:
        self._tokens.add(token)

    def remove(self, token: str) -> None:
        self._tokens.discard(token)

    def clear(self) -> None:
        self._tokens.clear()

    def __len__(self):
        return len(self._tokens)


class RedisTokenStore(TokenStore):
    """Tokens as Redis keys: logofive:token:<token>."""

    KEY_PREFIX = "logofive:token:"

    def __init__(self, client):
        self._redis = client

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def contains(self, token: str) -> bool:
        return bool(self._redis.exists(self._key(token)))

    def insert(self, token: str) -> None:
        self._redis.set(self._key(token), "1")

    def remove(self, token: str) -> None:
        self._redis.delete(self._key(token))


def _connect_redis(url):
    import redis

    client = redis.from_url(url)
    client.ping()
    return client


def _redacted(url):
    """scheme://host:port/db without the user and password."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}{parts.path}"


def init_token_store(app):
    """Pick the backend from TOKEN_STORE_URL and bind it to the app.

    If Redis is configured but unreachable, fall back to memory so the
    site still boots (tokens then live only as long as this process).
    """
    url = app.config.get("TOKEN_STORE_URL") or ""
    store = None

    if url:
        try:
            store = RedisTokenStore(_connect_redis(url))
            logger.info(f"Token store: redis ({_redacted(url)})")
        except Exception as e:
            logger.warning(f"Redis token store unavailable, using memory: {e}")

    if store is None:
        store = MemoryTokenStore()
        logger.info("Token store: memory")

    app.extensions[EXTENSION_KEY] = store
    return store


def get_token_store() -> TokenStore:
    """Return the token store bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]
