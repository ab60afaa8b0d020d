"""
Valkey (Redis-compatible) store for small JSON documents with a lifetime.

Signed-in sessions and cached view data are the only things kept in Valkey,
and both are JSON documents that expire, so that is the whole surface.
Connection URL comes from Vault.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    JSON documents in Valkey.

    Usage:
        store = ValkeyClient(valkey_url)
        store.set_json("view:/dashboard/invoices", rows, expire_seconds=300)
        rows = store.get_json("view:/dashboard/invoices")  # None once expired
    """

    def __init__(self, url: str):
        self._client = redis.from_url(url, decode_responses=True, socket_connect_timeout=5)
        logger.info("Valkey client created")

    def get_json(self, key: str) -> dict | list | None:
        """Document stored at ``key``; None if it never existed or has expired.

        Raises:
            ValueError: The key holds something that isn't JSON.
        """
        raw = self._client.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key {key}") from e

    def set_json(self, key: str, value: dict | list, expire_seconds: int | None = None) -> None:
        """Store ``value``, replacing whatever was there along with its lifetime."""
        self._client.set(key, json.dumps(value), ex=expire_seconds)

    def expire(self, key: str, seconds: int) -> bool:
        """Restart the lifetime of ``key``. False if the key is already gone."""
        return bool(self._client.expire(key, seconds))

    def delete(self, key: str) -> bool:
        """Drop ``key``. False if there was nothing to drop."""
        return self._client.delete(key) > 0

    def close(self) -> None:
        self._client.close()
