"""Application factory.

``create_app`` wires already-built clients into services and routers, which
is what tests use. ``build_app`` is the production entry point: it loads
.env, reads connection URLs from Vault and connects.

    uvicorn main:build_app --factory
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.dispatcher import CredentialDispatcher
from auth.providers import CredentialsProvider
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.services.invoice_service import InvoiceService
from core.view_cache import ViewCache

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    postgres: PostgresClient,
    valkey: ValkeyClient,
    auth_config: AuthConfig | None = None,
    view_cache_ttl_seconds: int = 300,
) -> FastAPI:
    """Build the FastAPI app around the given infrastructure clients."""
    config = auth_config or AuthConfig()

    view_cache = ViewCache(valkey, ttl_seconds=view_cache_ttl_seconds)
    services = {
        "invoice": InvoiceService(postgres, view_cache),
    }

    auth_db = AuthDatabase(postgres)
    session_manager = SessionManager(valkey, config)
    credentials = CredentialsProvider(auth_db, provider_id=config.credentials_provider_id)
    auth_service = AuthService(
        auth_db=auth_db,
        session_manager=session_manager,
        providers=[credentials],
    )
    dispatcher = CredentialDispatcher(auth_service, provider_id=config.credentials_provider_id)

    app = FastAPI(title="Invoice actions")
    # Added last so it runs first and auth failures carry a request id too
    app.add_middleware(AuthMiddleware, session_manager=session_manager)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_auth_router(dispatcher, auth_service, config), prefix="/auth")
    app.include_router(create_data_router(services, view_cache), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def build_app() -> FastAPI:
    """Production app: secrets from Vault, live Postgres and Valkey."""
    from clients.vault_client import get_database_url, get_valkey_url

    load_dotenv()
    configure_logging()

    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())
    logger.info("Infrastructure clients ready")

    return create_app(postgres, valkey)
