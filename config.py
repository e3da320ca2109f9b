"""
config.py — Runtime Settings
=============================
Everything tunable comes from the environment (a local `.env` file is
loaded first).  Defaults suit a local development database.

    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME
    DB_POOL_MAX          – connection ceiling for the pool
    DB_CONNECT_TIMEOUT   – seconds to wait for a pooled connection
    SECRET_KEY           – Flask session key (random per process if unset)
    HOST, PORT           – bind address for `python main.py`
    LOG_LEVEL
"""

import logging
import os
import secrets
from dataclasses import dataclass, field

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    db_host:            str   = "localhost"
    db_port:            int   = 5432
    db_user:            str   = "postgres"
    db_password:        str   = "password"
    db_name:            str   = "datastruct_db"
    db_pool_max:        int   = 10
    db_connect_timeout: float = 5.0
    secret_key:         str   = field(default_factory=lambda: secrets.token_hex(32), repr=False)
    host:               str   = "0.0.0.0"
    port:               int   = 3000
    log_level:          str   = "INFO"

    @property
    def conninfo(self) -> str:
        """libpq connection string for psycopg, with values quoted as needed."""
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
            connect_timeout=int(self.db_connect_timeout),
        )

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        env = os.environ
        return cls(
            db_host=env.get("DB_HOST", "localhost"),
            db_port=int(env.get("DB_PORT", "5432")),
            db_user=env.get("DB_USER", "postgres"),
            db_password=env.get("DB_PASSWORD", "password"),
            db_name=env.get("DB_NAME", "datastruct_db"),
            db_pool_max=int(env.get("DB_POOL_MAX", "10")),
            db_connect_timeout=float(env.get("DB_CONNECT_TIMEOUT", "5.0")),
            secret_key=env.get("SECRET_KEY") or secrets.token_hex(32),
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", "3000")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
