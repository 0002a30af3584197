from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

import mysql.connector

from ..core.exceptions import BackendNotConfiguredError, ConfigurationError


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_url(cls, url: str, key: str) -> "DBConfig":
        """Build from the backend endpoint URL and access key.

        URL form: mysql://user@host:port/database. The access key is the password;
        a password embedded in the URL is used only when no key is given.
        """
        parsed = urlparse(url)
        if parsed.scheme not in {"mysql", "mysql+mysqlconnector"}:
            raise ConfigurationError(f"Unsupported backend URL scheme: {parsed.scheme!r}")
        database = parsed.path.lstrip("/")
        if not parsed.hostname or not database:
            raise ConfigurationError("Backend URL must name a host and a database")
        return cls(
            host=parsed.hostname,
            port=int(parsed.port or 3306),
            user=unquote(parsed.username or "root"),
            password=key or unquote(parsed.password or ""),
            database=database,
        )


class DatabaseConnection:
    """DB connection factory, constructed once by the container and passed in.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    def __init__(self, config: Optional[DBConfig]):
        self._config = config

    @property
    def config(self) -> Optional[DBConfig]:
        return self._config

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    def connect(self):
        if self._config is None:
            raise BackendNotConfiguredError("Backend not configured")
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
