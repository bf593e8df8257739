from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 30

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        """Build from a settings DB_CONFIG dict, filling connector defaults."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "member_events")),
            connect_timeout=int(db_config.get("connect_timeout", 30)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            connection_timeout=self.connect_timeout,
        )
        if with_database:
            kwargs["database"] = self.database
        return kwargs

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide connection factory.

    Every repository call opens a short-lived connection and commits on its own,
    so no connection is ever shared between requests.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def describe(self) -> str:
        return self._config.describe()

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs())
