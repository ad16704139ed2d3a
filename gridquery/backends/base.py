from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from ..adapters.base import BaseAdapter
from ..config import QueryBundle
from ..core.filters import SearchPlan
from ..core.ordering import OrderTerm
from ..core.pagination import PageWindow
from ..core.state import InFlightQuery
from ..core.template import render_template


class GridBackend(ABC):
    """Strategy emitting the search/order/page steps for one query representation.

    Each ``apply_*`` step updates the ``InFlightQuery`` it is handed. Backends
    hold configuration only; all per-call state lives in the accumulator.
    """

    kind = 'base'

    def __init__(self, bundle: QueryBundle, adapter: Optional[BaseAdapter] = None):
        self.bundle = bundle
        self.adapter = adapter or BaseAdapter()

    @abstractmethod
    def begin(self) -> InFlightQuery:
        ...

    @abstractmethod
    def apply_filter(self, query: InFlightQuery, plan: SearchPlan, text: str) -> None:
        ...

    @abstractmethod
    def apply_order(self, query: InFlightQuery, terms: List[OrderTerm], text: str) -> None:
        ...

    @abstractmethod
    def apply_limit(self, query: InFlightQuery, window: Optional[PageWindow]) -> None:
        ...

    def finalize(self, query: InFlightQuery) -> None:
        return None

    @abstractmethod
    async def fetch_rows(self, query: InFlightQuery, executor: Any) -> List[Mapping[str, Any]]:
        ...

    # --- counts ------------------------------------------------------------
    def count_statement(self, condition: str) -> str:
        """The caller's count template with its condition placeholder resolved."""
        return render_template(
            self.bundle.base_count_query or '',
            {self.bundle.base_count_query_cond_specifier or '': condition},
        )

    async def count_total(self, query: InFlightQuery, executor: Any) -> int:
        return await executor.scalar_count(self.count_statement(''))

    async def count_filtered(self, query: InFlightQuery, executor: Any) -> int:
        return await executor.scalar_count(self.count_statement(query.filter or ''))
