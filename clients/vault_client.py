"""
Connection URLs from HashiCorp Vault.

The service needs two secrets, ``invoices/database`` and ``invoices/valkey``
(KV v2, field ``url``). It logs in once per process with AppRole credentials
from the environment and keeps every value it has read.
"""

import logging
import os
from functools import lru_cache

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

logger = logging.getLogger(__name__)

SECRET_PREFIX = "invoices"


class VaultClient:
    """Reads fields of KV v2 secrets under ``invoices/``.

    Configuration comes from ``VAULT_ADDR``, ``VAULT_ROLE_ID``,
    ``VAULT_SECRET_ID`` and optionally ``VAULT_NAMESPACE``. Construction
    fails on missing configuration or a rejected login.
    """

    def __init__(self, vault_addr: str | None = None, vault_namespace: str | None = None):
        vault_addr = vault_addr or os.getenv("VAULT_ADDR")
        if not vault_addr:
            raise ValueError("VAULT_ADDR environment variable is required")

        role_id = os.getenv("VAULT_ROLE_ID")
        secret_id = os.getenv("VAULT_SECRET_ID")
        if not (role_id and secret_id):
            raise ValueError(
                "VAULT_ROLE_ID and VAULT_SECRET_ID environment variables are required"
            )

        self.client = hvac.Client(
            url=vault_addr,
            namespace=vault_namespace or os.getenv("VAULT_NAMESPACE"),
        )
        try:
            login = self.client.auth.approle.login(role_id=role_id, secret_id=secret_id)
        except (Unauthorized, Forbidden, InvalidPath) as e:
            raise PermissionError(f"AppRole authentication failed: {e}") from e
        self.client.token = login["auth"]["client_token"]

        if not self.client.is_authenticated():
            raise PermissionError("Vault authentication failed")
        logger.info("Vault login as AppRole at %s", vault_addr)

    def get_secret(self, path: str, field: str) -> str:
        """
        One field of the secret at ``invoices/<path>``.

        Raises:
            PermissionError: The secret doesn't exist or this role can't read it.
            KeyError: The secret has no such field.
        """
        full_path = f"{SECRET_PREFIX}/{path}"
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise PermissionError(f"Secret path '{full_path}' not found in Vault") from e
        except (Unauthorized, Forbidden) as e:
            raise PermissionError(f"Access denied to secret '{full_path}': {e}") from e

        values = response["data"]["data"]
        if field not in values:
            raise KeyError(f"Field '{field}' not found in secret '{full_path}'")
        return values[field]


@lru_cache(maxsize=1)
def _vault() -> VaultClient:
    return VaultClient()


@lru_cache(maxsize=None)
def _read(path: str, field: str) -> str:
    return _vault().get_secret(path, field)


def get_database_url() -> str:
    """PostgreSQL connection URL."""
    return _read("database", "url")


def get_valkey_url() -> str:
    """Valkey connection URL."""
    return _read("valkey", "url")
