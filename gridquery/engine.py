"""Grid engine: turns a grid request into a paged response envelope.

One call runs, in order: column resolution, search filter, ordering, paging,
the main query, the total count and the filtered count. The three
statements run one after another on the caller's executor and are not
wrapped in a transaction, so under concurrent writes the counts and the
returned page may disagree.

Usage::

    engine = GridEngine(session, output_as_json=False)
    envelope = await engine.simple_result(request, bundle, 0, columns, True, User)
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from sqlalchemy import MetaData, Table
from sqlalchemy.ext.asyncio import AsyncSession

from .adapters import adapter_for_bind
from .adapters.base import BaseAdapter
from .backends import GridBackend, ModelBackend, TableBackend, TemplateBackend
from .config import ColumnSpec, QueryBundle
from .core.columns import ColumnResolver
from .core.filters import SearchPlan, build_search_plan, render_filter_text
from .core.ordering import build_order_terms, render_order_text
from .core.pagination import page_window
from .core.state import InFlightQuery
from .errors import ConfigurationMissingError
from .executor import GridExecutor, SessionExecutor
from .request import GridRequest, normalize_request
from .response import ResponseEnvelope, format_rows

logger = logging.getLogger(__name__)

__all__ = ["GridEngine"]

Result = Union[ResponseEnvelope, str]


def _normalize_columns(columns: Sequence[Any]) -> list[ColumnSpec]:
    return [c if isinstance(c, ColumnSpec) else ColumnSpec.from_dict(c) for c in (columns or [])]


def _normalize_bundle(bundle: Any) -> QueryBundle:
    if isinstance(bundle, QueryBundle):
        return bundle
    return QueryBundle.from_mapping(bundle or {})


class GridEngine:
    """Builds and runs grid queries against a model, a table, or a SQL template.

    Args:
        executor: a ``GridExecutor``, or an ``AsyncSession`` to wrap in
            ``SessionExecutor``.
        output_as_json: return the envelope as JSON text (default) instead of
            a ``ResponseEnvelope``.
        metadata: ``MetaData`` used to look up ``QueryBundle.table_name``.
        adapter: dialect adapter for literal quoting and limit syntax;
            defaults to the one matching the session's bind.
    """

    def __init__(
        self,
        executor: Union[GridExecutor, AsyncSession, None],
        *,
        output_as_json: bool = True,
        metadata: Optional[MetaData] = None,
        adapter: Optional[BaseAdapter] = None,
    ):
        if isinstance(executor, AsyncSession):
            # Literal quoting and paging syntax follow the session's dialect
            if adapter is None and executor.bind is not None:
                adapter = adapter_for_bind(executor.bind)
            executor = SessionExecutor(executor)
        self.executor = executor
        self.output_as_json = output_as_json
        self.metadata = metadata
        self.adapter = adapter or BaseAdapter()

    # --- backend selection --------------------------------------------------
    def _lookup_table(self, name: str) -> Table:
        if self.metadata is None:
            raise ConfigurationMissingError(f"No MetaData configured to resolve table '{name}'")
        table = self.metadata.tables.get(name)
        if table is None:
            raise ConfigurationMissingError(f"Unknown table '{name}'")
        return table

    def structured_backend(self, bundle: QueryBundle, source: Any = None) -> GridBackend:
        if source is None:
            if not bundle.table_name:
                raise ConfigurationMissingError("A model, a table, or bundle.table_name is required")
            source = bundle.table_name
        if isinstance(source, str):
            source = self._lookup_table(source)
        if isinstance(source, Table):
            return TableBackend(source, bundle, self.adapter)
        return ModelBackend(source, bundle, self.adapter)

    def template_backend(self, bundle: QueryBundle) -> GridBackend:
        return TemplateBackend(bundle, self.adapter)

    # --- query construction -------------------------------------------------
    def build_query(
        self,
        backend: GridBackend,
        request: GridRequest,
        start_column: int,
        columns: Sequence[ColumnSpec],
    ) -> InFlightQuery:
        """Run the search, order and page steps without executing anything."""
        bundle = backend.bundle
        resolver = ColumnResolver(columns)
        query = backend.begin()

        if request.has_columns:
            plan = build_search_plan(request, resolver, start_column)
            text = render_filter_text(
                plan,
                operator=bundle.like_operator,
                caster=bundle.caster,
                quote=self.adapter.quote_literal,
            )
        else:
            plan, text = SearchPlan(), ''
        backend.apply_filter(query, plan, text)

        terms = build_order_terms(request, resolver, start_column)
        backend.apply_order(query, terms, render_order_text(terms, pre_ordered=bundle.pre_ordered))

        backend.apply_limit(query, page_window(request))
        backend.finalize(query)
        return query

    async def _run(
        self,
        backend: GridBackend,
        request: GridRequest,
        start_column: int,
        columns: Sequence[ColumnSpec],
        use_numbering: bool,
    ) -> Result:
        query = self.build_query(backend, request, start_column, columns)
        rows = await backend.fetch_rows(query, self.executor)
        visible = ColumnResolver(columns).visible(request, start_column)
        data = format_rows(
            rows,
            visible,
            use_numbering=use_numbering,
            first_number=(request.start or 0) + 1,
        )
        records_total = await backend.count_total(query, self.executor)
        records_filtered = await backend.count_filtered(query, self.executor)
        logger.debug(
            f"Grid {backend.kind} draw={request.draw}: {len(data)} rows, "
            f"total={records_total}, filtered={records_filtered}"
        )
        return self.output(request.draw, data, records_total, records_filtered)

    def output(self, draw: int, data, records_total: int = 0, records_filtered: int = 0) -> Result:
        envelope = ResponseEnvelope(
            draw=draw,
            records_total=records_total,
            records_filtered=records_filtered,
            data=list(data or []),
        )
        if self.output_as_json:
            return envelope.to_json()
        return envelope

    # --- public operations --------------------------------------------------
    async def simple_result(
        self,
        request: Any,
        bundle: Any,
        start_column: int,
        columns: Sequence[Any],
        use_numbering: bool = False,
        source: Any = None,
    ) -> Result:
        """Single-table grid over an ORM model, a Core table, or ``bundle.table_name``."""
        bundle = _normalize_bundle(bundle)
        backend = self.structured_backend(bundle, source)
        return await self._run(backend, normalize_request(request), start_column,
                               _normalize_columns(columns), use_numbering)

    async def complex_result(
        self,
        request: Any,
        bundle: Any,
        start_column: int,
        columns: Sequence[Any],
        use_numbering: bool = False,
    ) -> Result:
        """Multi-source grid over the raw SQL template in ``bundle.query_container``."""
        bundle = _normalize_bundle(bundle)
        backend = self.template_backend(bundle)
        return await self._run(backend, normalize_request(request), start_column,
                               _normalize_columns(columns), use_numbering)

    async def paged_result(
        self,
        request: Any,
        bundle: Any,
        start_column: int,
        columns: Sequence[Any],
        use_numbering: bool = False,
        source: Any = None,
    ) -> Result:
        """Dispatch to ``simple_result`` when a source or table name is given, else ``complex_result``."""
        bundle = _normalize_bundle(bundle)
        if source is not None or bundle.table_name:
            return await self.simple_result(request, bundle, start_column, columns, use_numbering, source)
        return await self.complex_result(request, bundle, start_column, columns, use_numbering)
