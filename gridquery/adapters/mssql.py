from __future__ import annotations
from .base import BaseAdapter

class MSSQLAdapter(BaseAdapter):
    """SQL Server: no LIMIT keyword, pagination is OFFSET ... FETCH NEXT.

    OFFSET/FETCH is only valid after an ORDER BY, so templates paged on MSSQL
    should carry a default ordering (see ``QueryBundle.pre_ordered``).
    """

    name = 'mssql'
    like_operator = 'LIKE'
    caster = 'CAST(? AS NVARCHAR(MAX))'

    def quote_literal(self, value: str) -> str:
        # N'' keeps non-ASCII search terms intact against NVARCHAR columns.
        return "N" + super().quote_literal(value)

    def limit_clause(self, length: int, start: int) -> str:
        return f"OFFSET {int(start)} ROWS FETCH NEXT {int(length)} ROWS ONLY"
