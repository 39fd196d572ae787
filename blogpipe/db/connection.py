"""Database connection management."""

from contextlib import contextmanager
from typing import Any, Dict, Generator

import psycopg
from psycopg.rows import dict_row

from ..errors import ConfigError


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """
    Open one database connection for the duration of a run.

    The connection is closed on exit whether the block succeeded or not.
    """
    dsn = config.get("dsn")
    if not dsn:
        raise ConfigError(f"Database connection string not set ({config.get('dsn_env')})")

    with psycopg.connect(dsn, row_factory=dict_row) as conn:
        yield conn
