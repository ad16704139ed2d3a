from __future__ import annotations
from typing import Any, Callable, Dict
from sqlalchemy import String, cast
from sqlalchemy.sql import ColumnElement

# Structured-query counterparts of the text "contains" operators.
CONTAINS_OPERATORS: Dict[str, Callable[[Any, str], Any]] = {
    'LIKE': lambda col, v: col.like(v),
    'ILIKE': lambda col, v: col.ilike(v),
    'NOT LIKE': lambda col, v: col.not_like(v),
    'NOT ILIKE': lambda col, v: col.not_ilike(v),
}


class BaseAdapter:
    """Generic SQL dialect: ``LIKE``, ``CAST(? AS VARCHAR)``, ``LIMIT n OFFSET m``."""

    name = 'base'
    like_operator = 'LIKE'
    caster = 'CAST(? AS VARCHAR)'
    caster_specifier = '?'

    def quote_literal(self, value: str) -> str:
        """Render ``value`` as a single-quoted SQL string literal."""
        return "'" + str(value).replace("'", "''") + "'"

    def limit_clause(self, length: int, start: int) -> str:
        return f"LIMIT {int(length)} OFFSET {int(start)}"

    def text_expr(self, column: ColumnElement) -> ColumnElement:
        # Non-string columns are compared through their text form.
        if isinstance(getattr(column, 'type', None), String):
            return column
        return cast(column, String)

    def contains(self, column: ColumnElement, operator: str, term: str) -> ColumnElement:
        expr = self.text_expr(column)
        pattern = f"%{term}%"
        fn = CONTAINS_OPERATORS.get(' '.join(operator.upper().split()))
        if fn is not None:
            return fn(expr, pattern)
        return expr.op(operator)(pattern)
