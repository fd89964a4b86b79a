"""
Restaurant session manager.

Resolves which restaurant's Supabase project is active from the persisted
`restaurant_info` record, builds a client for it and keeps that one client
cached until the restaurant changes or the user logs out.
"""

import asyncio
import inspect
import logging
import threading
from typing import Any, Callable, Optional

from pydantic import ValidationError
from supabase import Client, ClientOptions, create_client

from menuhub.config import Settings
from menuhub.modules.tenants.errors import MalformedCredential, NotAuthenticated, TransportFailure
from menuhub.modules.tenants.schemas import TenantCredential
from menuhub.modules.tenants.storage import ClientTokenStorage, FileStorage, MemoryStorage, SessionStorage

logger = logging.getLogger(__name__)

SESSION_CHECK_TIMEOUT_SECONDS = 5.0

ClientFactory = Callable[[str, str, Optional[SessionStorage]], Any]


def create_tenant_client(base_url: str, api_key: str, token_storage: Optional[SessionStorage] = None) -> Client:
    """Build a Supabase client for one restaurant project. No network call happens here."""
    if token_storage is None:
        return create_client(base_url, api_key)
    options = ClientOptions(
        storage=token_storage,
        persist_session=True,
        auto_refresh_token=True,
    )
    return create_client(base_url, api_key, options=options)


def parse_credential(raw: str) -> TenantCredential:
    try:
        return TenantCredential.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedCredential(f"Invalid restaurant_info record: {e.error_count()} error(s)") from e


class TenantSessionManager:
    def __init__(
        self,
        durable: SessionStorage,
        ephemeral: SessionStorage,
        client_factory: ClientFactory = create_tenant_client,
        storage_key: str = "restaurant_info",
        preference_key: str = "keep_logged_in_preference",
        session_check_timeout: float = SESSION_CHECK_TIMEOUT_SECONDS,
    ):
        self.durable = durable
        self.ephemeral = ephemeral
        self.storage_key = storage_key
        self.preference_key = preference_key
        self.session_check_timeout = session_check_timeout
        self._client_factory = client_factory
        self._lock = threading.RLock()
        self._client = None
        self._client_base_url: Optional[str] = None
        # Bumped whenever the cached client is retired
        self._generation = 0

    @property
    def cached_base_url(self) -> Optional[str]:
        return self._client_base_url

    def token_storage_for(self, keep_signed_in: bool) -> SessionStorage:
        return self.durable if keep_signed_in else self.ephemeral

    def _read(self, storage: SessionStorage) -> Optional[TenantCredential]:
        raw = storage.get(self.storage_key)
        if not raw:
            return None
        try:
            return parse_credential(raw)
        except MalformedCredential as e:
            logger.warning(f"Treating {storage.scope} session record as absent: {e}")
            return None

    def get_active_credential(self) -> Optional[TenantCredential]:
        """Ephemeral scope wins over durable when both hold a record."""
        credential = self._read(self.ephemeral)
        if credential is None:
            credential = self._read(self.durable)
        return credential

    def resolve_client(self):
        """Return the client for the active restaurant, building it only when the restaurant changed."""
        with self._lock:
            credential = self.get_active_credential()
            if credential is None:
                raise NotAuthenticated()

            if self._client is not None and self._client_base_url == credential.base_url:
                return self._client

            if self._client is not None:
                logger.info(f"Active restaurant changed from {self._client_base_url} to {credential.base_url}; rebuilding client")

            self._generation += 1
            generation = self._generation
            token_storage = ClientTokenStorage(
                self.token_storage_for(credential.keep_signed_in),
                lambda: self._generation == generation,
            )
            client = self._client_factory(credential.base_url, credential.api_key, token_storage)
            self._client = client
            self._client_base_url = credential.base_url
            logger.debug(f"Built restaurant client for {credential.base_url} ({token_storage.scope} token storage)")
            return client

    def connect(self, base_url: str, api_key: str, keep_signed_in: bool = False):
        """Uncached client with the token storage matching keep_signed_in."""
        return self._client_factory(base_url, api_key, self.token_storage_for(keep_signed_in))

    def store_credential(self, credential: TenantCredential) -> None:
        target = self.token_storage_for(credential.keep_signed_in)
        other = self.token_storage_for(not credential.keep_signed_in)
        with self._lock:
            target.set(self.storage_key, credential.to_record())
            other.remove(self.storage_key)
        logger.info(f"Stored session for restaurant {credential.name or credential.base_url} in {target.scope} storage")

    def invalidate_session(self) -> None:
        """Forget the active restaurant. The cached client is dropped even when a scope cannot be cleared."""
        with self._lock:
            self._client = None
            self._client_base_url = None
            self._generation += 1
            for storage in (self.ephemeral, self.durable):
                try:
                    storage.remove(self.storage_key)
                except Exception as e:
                    logger.error(f"Could not clear {storage.scope} session record: {type(e).__name__}: {e}")
        logger.info("Restaurant session cleared")

    def remember_keep_signed_in(self, keep_signed_in: bool) -> None:
        self.durable.set(self.preference_key, "true" if keep_signed_in else "false")

    def keep_signed_in_preference(self) -> bool:
        return self.durable.get(self.preference_key) == "true"

    async def _fetch_session(self, client):
        get_session = client.auth.get_session
        if inspect.iscoroutinefunction(get_session):
            return await get_session()
        # Sync SDK call: a late result from the worker thread is simply dropped.
        # Token writes it makes after the client is retired are dropped by ClientTokenStorage.
        result = await asyncio.to_thread(get_session)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def is_session_valid(self) -> bool:
        """True when the active restaurant has a live auth session with a user. Never raises."""
        try:
            if self.get_active_credential() is None:
                return False
            client = self.resolve_client()
            try:
                session = await asyncio.wait_for(self._fetch_session(client), timeout=self.session_check_timeout)
            except asyncio.TimeoutError as e:
                raise TransportFailure(f"Session check timed out after {self.session_check_timeout}s") from e
            return bool(session is not None and getattr(session, "user", None))
        except NotAuthenticated:
            return False
        except TransportFailure as e:
            logger.warning(f"Error checking login status: {e}")
            return False
        except Exception as e:
            logger.error(f"Error checking login status: {type(e).__name__}: {e}")
            return False


def build_session_manager(settings: Settings, client_factory: ClientFactory = create_tenant_client) -> TenantSessionManager:
    return TenantSessionManager(
        durable=FileStorage(settings.durable_storage_path),
        ephemeral=MemoryStorage(),
        client_factory=client_factory,
        storage_key=settings.credential_storage_key,
        preference_key=settings.keep_signed_in_preference_key,
        session_check_timeout=settings.session_check_timeout_seconds,
    )
