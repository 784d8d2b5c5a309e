from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supabase import Client, ClientOptions, create_client

from ..core.exceptions import ConfigurationError


@dataclass
class SupabaseConfig:
    url: str
    anon_key: str
    service_key: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.url and (self.service_key or self.anon_key))


class SupabaseConnection:
    """Singleton-like Supabase client factory.

    Note: The service-role client is created once and reused; anon clients used
    for token exchange are short-lived so no auth state leaks between requests.
    """

    _instance: Optional["SupabaseConnection"] = None

    def __init__(self, config: SupabaseConfig):
        self._config = config
        self._service_client: Optional[Client] = None

    @classmethod
    def get_instance(cls, config: SupabaseConfig) -> "SupabaseConnection":
        if cls._instance is None:
            cls._instance = SupabaseConnection(config)
        return cls._instance

    @property
    def configured(self) -> bool:
        return self._config.configured

    def client(self) -> Client:
        """Service-role client used for table, view and procedure access."""
        if not self.configured:
            raise ConfigurationError("Supabase not configured")
        if self._service_client is None:
            key = self._config.service_key or self._config.anon_key
            self._service_client = create_client(self._config.url, key)
        return self._service_client

    def anon_client(self) -> Client:
        if not self._config.url or not self._config.anon_key:
            raise ConfigurationError("Supabase not configured")
        options = ClientOptions(persist_session=False, auto_refresh_token=False)
        return create_client(self._config.url, self._config.anon_key, options=options)
