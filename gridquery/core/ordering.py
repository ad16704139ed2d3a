from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..config import ColumnSpec
from ..request import GridRequest
from .columns import ColumnResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderTerm:
    spec: ColumnSpec
    direction: str  # 'ASC' | 'DESC'

    @property
    def descending(self) -> bool:
        return self.direction == 'DESC'


def build_order_terms(request: GridRequest, resolver: ColumnResolver, start_column: int) -> List[OrderTerm]:
    """Sort terms in request order; earlier terms take precedence."""
    terms: List[OrderTerm] = []
    for entry in request.order:
        resolved = resolver.resolve_index(request, entry.column, start_column)
        if resolved is None:
            logger.debug(f"Skipping order on column index {entry.column}: unresolved or out of range")
            continue
        if not resolved.request.is_orderable:
            logger.debug(f"Skipping order on non-orderable column {resolved.request.data!r}")
            continue
        terms.append(OrderTerm(spec=resolved.spec, direction=entry.direction))
    return terms


def render_order_text(terms: List[OrderTerm], *, pre_ordered: bool = False) -> str:
    if not terms:
        return ''
    body = ', '.join(f"{t.spec.qualified} {t.direction}" for t in terms)
    return (', ' if pre_ordered else 'ORDER BY ') + body
