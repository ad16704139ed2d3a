from __future__ import annotations
from .base import BaseAdapter

class SQLiteAdapter(BaseAdapter):
    # SQLite LIKE is already case-insensitive for ASCII text.
    name = 'sqlite'
    like_operator = 'LIKE'
    caster = 'CAST(? AS TEXT)'
