from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class InFlightQuery:
    """Per-call accumulator threaded through the filter, order and limit steps.

    Structured backends compose ``statement`` (an SQLAlchemy ``Select``);
    ``filtered_statement`` keeps the filtered select before ordering and
    paging so counts can be derived from it. The template backend collects
    the text for each placeholder in ``slots`` and renders the template once
    all steps ran. ``filter``/``order``/``limit`` keep the text fragments in
    every mode; ``filter`` feeds the filtered-count statement.
    """

    kind: str
    statement: Any = None
    base_statement: Any = None
    filtered_statement: Any = None
    slots: Dict[str, str] = field(default_factory=dict)
    filter: str = ''
    order: str = ''
    limit: str = ''
    sql: Optional[str] = None
