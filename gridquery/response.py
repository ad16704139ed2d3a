from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from .core.columns import ResolvedColumn

__all__ = ["ResponseEnvelope", "format_rows"]


def format_rows(
    rows: Sequence[Mapping[str, Any]],
    visible: Sequence[ResolvedColumn],
    *,
    use_numbering: bool = False,
    first_number: int = 1,
) -> List[List[Any]]:
    """Project result rows to the grid's array-of-arrays shape.

    Values are taken by backend column name, one per visible client column
    in request order. With ``use_numbering`` every row starts with its
    1-based position, counting on from ``first_number``.
    """
    names = [rc.spec.col for rc in visible]
    out: List[List[Any]] = []
    number = first_number
    for row in rows:
        current: List[Any] = []
        if use_numbering:
            current.append(number)
            number += 1
        current.extend(row.get(name) for name in names)
        out.append(current)
    return out


@dataclass
class ResponseEnvelope:
    draw: int
    records_total: int = 0
    records_filtered: int = 0
    data: List[List[Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'draw': self.draw,
            'recordsTotal': self.records_total,
            'recordsFiltered': self.records_filtered,
            'data': self.data,
        }

    def to_json(self) -> str:
        # Dates, decimals and UUIDs fall back to their string form.
        return json.dumps(self.to_dict(), default=str)
