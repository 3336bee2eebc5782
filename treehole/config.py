"""
Process configuration using Pydantic Settings.

Values come from the environment, or from a .env file in the working
directory. They are validated when the module is imported, so a bad
configuration stops the process before Django finishes loading.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DB_ENGINES = {
    "sqlite": "django.db.backends.sqlite3",
    "mysql": "django.db.backends.mysql",
}


class TreeHoleConfig(BaseSettings):
    """
    Environment-backed settings for the Tree Hole server.

    Only ADMIN_TOKEN and SECRET_KEY need overriding in production; the MySQL
    variables are read when DB_ENGINE=mysql.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Operator
    admin_token: str = "treehole-admin"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"
    secret_key: str = "treehole-insecure-development-key"
    allowed_hosts: str = "*"

    # Database
    db_engine: str = "sqlite"
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "treehole"
    sqlite_path: str = "treehole.sqlite3"
    db_timeout: int = 10  # seconds to wait on the store

    @field_validator("db_engine")
    @classmethod
    def validate_db_engine(cls, value: str) -> str:
        engine = value.strip().lower()
        if engine not in DB_ENGINES:
            raise ValueError(f"DB_ENGINE must be one of {sorted(DB_ENGINES)}")
        return engine

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level

    @field_validator("port", "db_port", "db_timeout")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @property
    def sqlite_test_path(self) -> str:
        path = Path(self.sqlite_path)
        return str(path.with_name(f"test_{path.name}"))

    @property
    def allowed_host_list(self) -> List[str]:
        return [host.strip() for host in self.allowed_hosts.split(",") if host.strip()]

    def database(self) -> dict:
        """Django DATABASES["default"] entry for the configured engine."""
        if self.db_engine == "mysql":
            return {
                "ENGINE": DB_ENGINES["mysql"],
                "HOST": self.db_host,
                "PORT": self.db_port,
                "USER": self.db_user,
                "PASSWORD": self.db_password,
                "NAME": self.db_name,
                "CONN_MAX_AGE": 0,
                "OPTIONS": {
                    "charset": "utf8mb4",
                    # Each statement sees rows committed before it, including those
                    # committed while a submission waited on the limit row lock.
                    "isolation_level": "read committed",
                    "connect_timeout": self.db_timeout,
                    "read_timeout": self.db_timeout,
                    "write_timeout": self.db_timeout,
                },
            }
        return {
            "ENGINE": DB_ENGINES["sqlite"],
            "NAME": self.sqlite_path,
            "CONN_MAX_AGE": 0,
            # A file, not the shared-cache in-memory default: threads in the
            # concurrency tests must queue on the database lock.
            "TEST": {"NAME": self.sqlite_test_path},
            "OPTIONS": {
                # Writers take the database lock at BEGIN, which serialises
                # submissions the way SELECT ... FOR UPDATE does elsewhere.
                "transaction_mode": "IMMEDIATE",
                "timeout": self.db_timeout,
            },
        }


@lru_cache
def get_config() -> TreeHoleConfig:
    return TreeHoleConfig()
