"""Single-table backends composing an SQLAlchemy ``Select``.

``ModelBackend`` wraps an ORM mapped class and reads values from the loaded
instances; ``TableBackend`` wraps a Core ``Table`` and reads result rows.
Search terms are bound parameters here; the text filter is still computed
for the count statement.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Table, func, inspect as sa_inspect, or_, select
from sqlalchemy.sql import ColumnElement

from ..adapters.base import BaseAdapter
from ..config import ColumnSpec, QueryBundle
from ..core.filters import SearchPlan
from ..core.ordering import OrderTerm
from ..core.pagination import PageWindow
from ..core.state import InFlightQuery
from ..errors import ConfigurationMissingError
from .base import GridBackend

logger = logging.getLogger(__name__)


class StructuredBackend(GridBackend):
    kind = 'structured'

    def __init__(self, bundle: QueryBundle, adapter: Optional[BaseAdapter] = None):
        super().__init__(bundle, adapter)
        bundle.validate_for_structured()

    @property
    def table(self) -> Table:
        raise NotImplementedError

    def base_select(self):
        raise NotImplementedError

    def column(self, spec: ColumnSpec) -> ColumnElement:
        col = self.table.c.get(spec.col)
        if col is None:
            raise ConfigurationMissingError(f"Unknown column '{spec.col}' on table '{self.table.name}'")
        return col

    def begin(self) -> InFlightQuery:
        stmt = self.base_select()
        return InFlightQuery(kind=self.kind, statement=stmt, base_statement=stmt, filtered_statement=stmt)

    def apply_filter(self, query: InFlightQuery, plan: SearchPlan, text: str) -> None:
        query.filter = text
        op = self.bundle.like_operator
        stmt = query.statement
        if plan.global_columns:
            stmt = stmt.where(or_(*[
                self.adapter.contains(self.column(spec), op, plan.global_term)
                for spec in plan.global_columns
            ]))
        for spec, term in plan.specified:
            stmt = stmt.where(self.adapter.contains(self.column(spec), op, term))
        query.statement = stmt
        query.filtered_statement = stmt

    def apply_order(self, query: InFlightQuery, terms: List[OrderTerm], text: str) -> None:
        query.order = text
        stmt = query.statement
        for term in terms:
            col = self.column(term.spec)
            stmt = stmt.order_by(col.desc() if term.descending else col.asc())
        query.statement = stmt

    def apply_limit(self, query: InFlightQuery, window: Optional[PageWindow]) -> None:
        if window is None:
            return
        query.statement = query.statement.offset(window.start).limit(window.length)
        query.limit = self.adapter.limit_clause(window.length, window.start)

    # Without a count template the counts come from the composed selects.
    async def count_total(self, query: InFlightQuery, executor: Any) -> int:
        if self.bundle.base_count_query:
            return await super().count_total(query, executor)
        return await executor.scalar_count(
            select(func.count()).select_from(query.base_statement.subquery())
        )

    async def count_filtered(self, query: InFlightQuery, executor: Any) -> int:
        if self.bundle.base_count_query:
            return await super().count_filtered(query, executor)
        return await executor.scalar_count(
            select(func.count()).select_from(query.filtered_statement.subquery())
        )


class TableBackend(StructuredBackend):
    kind = 'table'

    def __init__(self, table: Table, bundle: QueryBundle, adapter: Optional[BaseAdapter] = None):
        self._table = table
        super().__init__(bundle, adapter)

    @property
    def table(self) -> Table:
        return self._table

    def base_select(self):
        return select(self._table)

    async def fetch_rows(self, query: InFlightQuery, executor: Any) -> List[Mapping[str, Any]]:
        return await executor.fetch_structured(query.statement)


class ModelBackend(StructuredBackend):
    """ORM backend: ``select(Model)`` restricted to rows with a primary key."""

    kind = 'model'

    def __init__(self, model: Any, bundle: QueryBundle, adapter: Optional[BaseAdapter] = None):
        self.model = model
        self.mapper = sa_inspect(model)
        super().__init__(bundle, adapter)
        self._attr_keys: Dict[str, str] = {}

    @property
    def table(self) -> Table:
        return self.mapper.local_table

    def primary_key(self) -> ColumnElement:
        if self.bundle.primary_key:
            return self.column(ColumnSpec(col=self.bundle.primary_key, dt=None))
        return self.mapper.primary_key[0]

    def base_select(self):
        return select(self.model).where(self.primary_key().is_not(None))

    def _attr_key(self, col_name: str) -> str:
        # Mapped attribute names may differ from column names.
        key = self._attr_keys.get(col_name)
        if key is None:
            prop = self.mapper.get_property_by_column(self.column(ColumnSpec(col=col_name, dt=None)))
            key = self._attr_keys[col_name] = prop.key
        return key

    async def fetch_rows(self, query: InFlightQuery, executor: Any) -> List[Mapping[str, Any]]:
        entities = await executor.fetch_entities(query.statement)
        names = [c.name for c in self.table.columns]
        return [{name: getattr(obj, self._attr_key(name)) for name in names} for obj in entities]
