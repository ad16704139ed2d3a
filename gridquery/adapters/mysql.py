from __future__ import annotations
from .base import BaseAdapter

class MySQLAdapter(BaseAdapter):
    name = 'mysql'
    like_operator = 'LIKE'
    caster = 'CAST(? AS CHAR)'

    def quote_literal(self, value: str) -> str:
        # Backslash is an escape character inside MySQL string literals by default.
        s = str(value).replace('\\', '\\\\').replace("'", "''")
        return f"'{s}'"
