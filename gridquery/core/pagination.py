from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..request import GridRequest


@dataclass(frozen=True)
class PageWindow:
    start: int
    length: int


def page_window(request: GridRequest) -> Optional[PageWindow]:
    """Offset/length to apply, or ``None`` when every row is requested.

    A missing ``start`` or ``length == -1`` disables paging; ``start == 0``
    is a regular first page.
    """
    if request.start is None or request.length == -1:
        return None
    return PageWindow(start=max(int(request.start), 0), length=max(int(request.length), 0))
