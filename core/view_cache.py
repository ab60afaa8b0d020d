"""
Per-view data cache in Valkey.

Read endpoints store the data they rendered for a view path; mutations call
``invalidate`` on the paths they affect so the next read recomputes.
"""

import logging

from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)

INVOICES_VIEW = "/dashboard/invoices"


class ViewCache:
    """Cached view data keyed by view path."""

    KEY_PREFIX = "view:"

    def __init__(self, valkey: ValkeyClient, ttl_seconds: int = 300):
        self._valkey = valkey
        self._ttl_seconds = ttl_seconds

    def _key(self, path: str) -> str:
        return f"{self.KEY_PREFIX}{path}"

    def get(self, path: str) -> dict | list | None:
        """Cached data for ``path``, or None if stale or never rendered."""
        return self._valkey.get_json(self._key(path))

    def set(self, path: str, data: dict | list) -> None:
        self._valkey.set_json(self._key(path), data, expire_seconds=self._ttl_seconds)

    def invalidate(self, path: str) -> None:
        """Mark ``path`` stale. Safe to call when nothing is cached."""
        self._valkey.delete(self._key(path))
        logger.info("Invalidated view %s", path)
