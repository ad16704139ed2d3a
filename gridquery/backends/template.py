from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from ..adapters.base import BaseAdapter
from ..config import QueryBundle
from ..core.filters import SearchPlan
from ..core.ordering import OrderTerm
from ..core.pagination import PageWindow
from ..core.state import InFlightQuery
from ..core.template import render_template
from .base import GridBackend

logger = logging.getLogger(__name__)


class TemplateBackend(GridBackend):
    """Raw SQL template with condition, order, limit and optional offset slots.

    Every slot resolves to text (possibly empty), so the rendered statement
    never carries an unresolved placeholder.
    """

    kind = 'template'

    def __init__(self, bundle: QueryBundle, adapter: Optional[BaseAdapter] = None):
        super().__init__(bundle, adapter)
        bundle.validate_for_template()

    def begin(self) -> InFlightQuery:
        b = self.bundle
        slots = {b.specifier_cond: '', b.specifier_order: '', b.specifier_limit: ''}
        if b.specifier_additional:
            slots[b.specifier_additional] = ''
        return InFlightQuery(kind=self.kind, slots=slots)

    def apply_filter(self, query: InFlightQuery, plan: SearchPlan, text: str) -> None:
        query.filter = text
        query.slots[self.bundle.specifier_cond] = text

    def apply_order(self, query: InFlightQuery, terms: List[OrderTerm], text: str) -> None:
        query.order = text
        query.slots[self.bundle.specifier_order] = text

    def apply_limit(self, query: InFlightQuery, window: Optional[PageWindow]) -> None:
        if window is None:
            return
        b = self.bundle
        if b.specifier_additional:
            # Separate tokens: the template owns the keywords.
            query.slots[b.specifier_limit] = str(window.length)
            query.slots[b.specifier_additional] = str(window.start)
            return
        query.limit = self.adapter.limit_clause(window.length, window.start)
        query.slots[b.specifier_limit] = query.limit

    def finalize(self, query: InFlightQuery) -> None:
        query.sql = render_template(self.bundle.query_container, query.slots)
        logger.debug(f"Rendered grid statement: {query.sql}")

    async def fetch_rows(self, query: InFlightQuery, executor: Any) -> List[Mapping[str, Any]]:
        return await executor.fetch_raw(query.sql)
