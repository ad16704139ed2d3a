from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..config import ColumnSpec
from ..request import ColumnRequest, GridRequest

logger = logging.getLogger(__name__)


def _key(value: Any) -> str:
    # Client identifiers arrive as strings from form posts and as ints from JSON.
    return str(value)


@dataclass(frozen=True)
class ResolvedColumn:
    index: int
    request: ColumnRequest
    spec: ColumnSpec


class ColumnResolver:
    """Match client columns (``columns[].data``) to backend columns (``ColumnSpec.dt``).

    Client columns with no backend counterpart (row decorations, action
    buttons) are skipped rather than rejected. When several specs share a
    ``dt``, the first one wins.
    """

    def __init__(self, columns: Sequence[ColumnSpec]):
        self.columns = tuple(columns)
        self._by_dt: Dict[str, ColumnSpec] = {}
        for spec in self.columns:
            self._by_dt.setdefault(_key(spec.dt), spec)

    def resolve(self, data: Any) -> Optional[ColumnSpec]:
        return self._by_dt.get(_key(data))

    def resolve_index(self, request: GridRequest, index: int, start_column: int) -> Optional[ResolvedColumn]:
        if index < 0 or index < start_column or index >= len(request.columns):
            return None
        rc = request.columns[index]
        spec = self.resolve(rc.data)
        if spec is None:
            return None
        return ResolvedColumn(index=index, request=rc, spec=spec)

    def visible(self, request: GridRequest, start_column: int) -> List[ResolvedColumn]:
        """Resolved request columns from ``start_column`` on, in request order."""
        out: List[ResolvedColumn] = []
        for i in range(max(start_column, 0), len(request.columns)):
            resolved = self.resolve_index(request, i, start_column)
            if resolved is None:
                logger.debug(f"Skipping unresolved client column {request.columns[i].data!r} at {i}")
                continue
            out.append(resolved)
        return out
