"""Grid request model (the DataTables server-side processing parameters).

The HTTP layer is expected to hand over either a ``GridRequest`` or the nested
mapping DataTables posts as JSON::

    {
        "draw": 3, "start": 20, "length": 10,
        "search": {"value": "bob"},
        "columns": [{"data": 0, "searchable": "true", "orderable": "true",
                     "search": {"value": ""}}],
        "order": [{"column": 0, "dir": "desc"}],
    }
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

__all__ = ["ColumnRequest", "OrderRequest", "GridRequest", "normalize_request"]


def _flag(value: Any) -> str:
    # Flags travel as the strings "true"/"false"; JSON clients may send booleans.
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'false'
    return str(value)


def _search_value(raw: Any) -> str:
    if isinstance(raw, Mapping):
        raw = raw.get('value')
    if raw is None:
        return ''
    return str(raw)


def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ColumnRequest:
    data: Any
    searchable: str = 'true'
    orderable: str = 'true'
    search_value: str = ''

    @property
    def is_searchable(self) -> bool:
        return self.searchable == 'true'

    @property
    def is_orderable(self) -> bool:
        return self.orderable == 'true'

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ColumnRequest":
        return cls(
            data=raw.get('data'),
            searchable=_flag(raw.get('searchable', 'true')),
            orderable=_flag(raw.get('orderable', 'true')),
            search_value=_search_value(raw.get('search')),
        )


@dataclass(frozen=True)
class OrderRequest:
    column: int
    dir: str = 'asc'

    @property
    def direction(self) -> str:
        # Only the exact literal "desc" sorts descending.
        return 'DESC' if self.dir == 'desc' else 'ASC'

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "OrderRequest":
        return cls(column=_as_int(raw.get('column'), -1), dir=str(raw.get('dir') or 'asc'))


@dataclass(frozen=True)
class GridRequest:
    """One grid data request.

    ``start`` is ``None`` when the client did not send an offset, and
    ``length == -1`` asks for every row.
    """

    draw: int = 0
    start: Optional[int] = None
    length: int = -1
    search_value: str = ''
    columns: Tuple[ColumnRequest, ...] = ()
    order: Tuple[OrderRequest, ...] = ()

    @property
    def has_columns(self) -> bool:
        return bool(self.columns)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GridRequest":
        columns = tuple(ColumnRequest.from_dict(c) for c in (raw.get('columns') or []))
        order = tuple(OrderRequest.from_dict(o) for o in (raw.get('order') or []))
        return cls(
            draw=_as_int(raw.get('draw'), 0),
            start=_as_int(raw.get('start'), None),
            length=_as_int(raw.get('length'), -1),
            search_value=_search_value(raw.get('search')),
            columns=columns,
            order=order,
        )


def normalize_request(raw: Any) -> GridRequest:
    if isinstance(raw, GridRequest):
        return raw
    if isinstance(raw, Mapping):
        return GridRequest.from_dict(raw)
    raise TypeError(f"Unsupported grid request form: {raw!r}")
