from __future__ import annotations

import logging
from typing import Any

from .base import BaseAdapter, CONTAINS_OPERATORS
from .sqlite import SQLiteAdapter
from .postgres import PostgresAdapter
from .mysql import MySQLAdapter
from .mssql import MSSQLAdapter

logger = logging.getLogger(__name__)


def get_adapter(dialect_name: str) -> BaseAdapter:
    dn = (dialect_name or '').lower()
    if dn.startswith('postgres'):
        return PostgresAdapter()
    if dn.startswith('mssql') or 'pyodbc' in dn:
        return MSSQLAdapter()
    if dn.startswith('mysql') or dn.startswith('mariadb'):
        return MySQLAdapter()
    if dn.startswith('sqlite'):
        return SQLiteAdapter()
    logger.warning(f"Unsupported database dialect: {dialect_name!r}. Falling back to generic adapter.")
    return BaseAdapter()


def adapter_for_bind(bind: Any) -> BaseAdapter:
    """Pick the adapter for a SQLAlchemy engine, async engine or connection."""
    # AsyncEngine exposes the dialect through its sync_engine
    sync = getattr(bind, 'sync_engine', bind)
    dialect_name = sync.dialect.name
    logger.info(f"Detected database dialect: {dialect_name}")
    return get_adapter(dialect_name)


__all__ = [
    'BaseAdapter',
    'CONTAINS_OPERATORS',
    'SQLiteAdapter',
    'PostgresAdapter',
    'MySQLAdapter',
    'MSSQLAdapter',
    'get_adapter',
    'adapter_for_bind',
]
