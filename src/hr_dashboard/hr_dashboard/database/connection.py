from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_DB_TIMEOUT_SECONDS


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: int = DEFAULT_DB_TIMEOUT_SECONDS


def db_config_from_dict(db_config: dict, *, timeout_seconds: Optional[int] = None) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "hr_dashboard")),
        timeout_seconds=int(timeout_seconds or db_config.get("timeout_seconds") or DEFAULT_DB_TIMEOUT_SECONDS),
    )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    ``timeout_seconds`` bounds both connecting and every socket read/write, so a
    hung query surfaces as a ``mysql.connector.Error`` instead of blocking.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.timeout_seconds),
            time_zone="+00:00",
        )
