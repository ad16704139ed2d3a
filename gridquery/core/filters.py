"""Search predicate construction.

A request can carry one global search term, applied as an OR across every
resolved column, and per-column terms, each AND-ed in. The predicate is built
as a plan first; backends then emit it either as composable SQLAlchemy
clauses or as text. The text form is produced for every backend because the
filtered-count statement is a raw template in all modes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from ..config import ColumnSpec, StringCaster
from ..request import GridRequest
from .columns import ColumnResolver

logger = logging.getLogger(__name__)


@dataclass
class SearchPlan:
    global_term: str = ''
    global_columns: List[ColumnSpec] = field(default_factory=list)
    specified: List[Tuple[ColumnSpec, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.global_columns and not self.specified


def build_search_plan(request: GridRequest, resolver: ColumnResolver, start_column: int) -> SearchPlan:
    plan = SearchPlan(global_term=request.search_value or '')
    visible = resolver.visible(request, start_column)
    if plan.global_term != '':
        plan.global_columns = [rc.spec for rc in visible]
    for rc in visible:
        term = rc.request.search_value
        if term and rc.request.is_searchable:
            plan.specified.append((rc.spec, term))
    return plan


def _condition(spec: ColumnSpec, term: str, *, operator: str, caster: StringCaster,
               quote: Callable[[str], str]) -> str:
    return f"{caster.apply(spec.qualified)} {operator} {quote('%' + term + '%')}"


def render_filter_text(plan: SearchPlan, *, operator: str, caster: StringCaster,
                       quote: Callable[[str], str]) -> str:
    """Render the plan as a ``WHERE`` clause, or ``''`` when there is nothing to filter.

    ``WHERE (g1 OR g2) AND s1 AND s2`` when both kinds are present,
    ``WHERE (g1 OR g2)`` or ``WHERE (s1 AND s2)`` when only one is.
    """
    global_conds = [
        _condition(spec, plan.global_term, operator=operator, caster=caster, quote=quote)
        for spec in plan.global_columns
    ]
    specified_conds = [
        _condition(spec, term, operator=operator, caster=caster, quote=quote)
        for spec, term in plan.specified
    ]
    text = ''
    if global_conds:
        text = 'WHERE (' + ' OR '.join(global_conds) + ')'
    if specified_conds:
        if text:
            text = text + ' AND ' + ' AND '.join(specified_conds)
        else:
            text = 'WHERE (' + ' AND '.join(specified_conds) + ')'
    logger.debug(f"Search filter: {text!r}")
    return text
