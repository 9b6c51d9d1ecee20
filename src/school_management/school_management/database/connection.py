from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pymongo import MongoClient

from ..core.constants import AUTH_SOURCE, CONNECT_TIMEOUT_MS

DEFAULT_DATABASE = "test"


def probe_client_options() -> dict[str, Any]:
    """Driver options used by the connectivity probe.

    pymongo keeps TCP keep-alive on for every socket and has no strict query
    mode, so neither needs a flag here.
    """
    return {
        "tls": True,
        "authSource": AUTH_SOURCE,
        "retryWrites": True,
        "connectTimeoutMS": CONNECT_TIMEOUT_MS,
    }


@dataclass
class DBConfig:
    uri: str
    database: Optional[str] = None
    options: dict[str, Any] = field(default_factory=dict)


class DatabaseConnection:
    """Singleton-like MongoClient factory.

    ``connect()`` always builds a new client owned by the caller; ``client()``
    returns one shared client for the repositories.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig, *, client_factory: Callable[..., Any] = MongoClient):
        self._config = config
        self._client_factory = client_factory
        self._shared = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return self._client_factory(self._config.uri, **self._config.options)

    def client(self):
        if self._shared is None:
            self._shared = self.connect()
        return self._shared

    def database_for(self, client):
        if self._config.database:
            return client[self._config.database]
        return client.get_default_database(default=DEFAULT_DATABASE)

    def database(self):
        return self.database_for(self.client())

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
            self._shared = None
