"""
Clients for the directory project, the central Supabase project that lists
every restaurant and receives ping results and contact leads.

Restaurant projects are never reached from here; see modules/tenants.
"""

import logging
import threading
from typing import Dict, Optional

from fastapi import HTTPException, status
from supabase import create_client, Client

from menuhub.config import settings

logger = logging.getLogger(__name__)

ANON = "anon"
SERVICE_ROLE = "service_role"


class DirectoryNotConfigured(RuntimeError):
    pass


class DirectoryClients:
    """One lazily built client per key role, shared by every request."""

    def __init__(self, url: Optional[str] = None, anon_key: Optional[str] = None, service_role_key: Optional[str] = None):
        self.url = url
        self.keys = {ANON: anon_key, SERVICE_ROLE: service_role_key}
        self._clients: Dict[str, Client] = {}
        self._lock = threading.Lock()

    def get(self, role: str = ANON) -> Client:
        # Without a service role key writes fall back to the anon client and RLS decides
        if role == SERVICE_ROLE and not self.keys[SERVICE_ROLE]:
            role = ANON
        with self._lock:
            if role not in self._clients:
                if not self.url or not self.keys[role]:
                    raise DirectoryNotConfigured("SUPABASE_URL and SUPABASE_KEY must be set")
                logger.debug(f"Creating directory client ({role})")
                self._clients[role] = create_client(self.url, self.keys[role])
            return self._clients[role]

    def reset(self):
        with self._lock:
            self._clients.clear()


directory_clients = DirectoryClients(
    settings.supabase_url,
    settings.supabase_key,
    settings.supabase_service_role_key,
)


def _directory_client(role: str) -> Client:
    try:
        return directory_clients.get(role)
    except DirectoryNotConfigured as e:
        logger.error(f"Directory project unavailable: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Restaurant directory is not configured")


def get_supabase() -> Client:
    return _directory_client(ANON)


def get_service_supabase() -> Client:
    """Service role client; bypasses RLS. Needed to write ping results and contact leads."""
    return _directory_client(SERVICE_ROLE)
