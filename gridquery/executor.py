"""Statement execution seam.

The engine never opens connections; it hands composed selects and rendered
statement text to a ``GridExecutor``. ``SessionExecutor`` implements it over
an SQLAlchemy ``AsyncSession``. Errors raised by the driver propagate as-is.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Protocol, Union, runtime_checkable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

__all__ = ["GridExecutor", "SessionExecutor", "literal_text"]


def literal_text(sql: str):
    """Wrap a finished statement so SQLAlchemy does not parse ``:name`` binds.

    Rendered statements carry no bind parameters, but search terms embedded
    as literals may contain colons; escaping every colon keeps them (and
    ``::type`` casts) verbatim.
    """
    return text(sql.replace(':', '\\:'))


@runtime_checkable
class GridExecutor(Protocol):
    async def fetch_structured(self, stmt: Select) -> List[Mapping[str, Any]]:
        ...

    async def fetch_entities(self, stmt: Select) -> List[Any]:
        ...

    async def fetch_raw(self, sql: str) -> List[Mapping[str, Any]]:
        ...

    async def scalar_count(self, stmt: Union[str, Select]) -> int:
        ...


class SessionExecutor:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_structured(self, stmt: Select) -> List[Mapping[str, Any]]:
        result = await self.session.execute(stmt)
        return list(result.mappings().all())

    async def fetch_entities(self, stmt: Select) -> List[Any]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def fetch_raw(self, sql: str) -> List[Mapping[str, Any]]:
        result = await self.session.execute(literal_text(sql))
        return list(result.mappings().all())

    async def scalar_count(self, stmt: Union[str, Select]) -> int:
        if isinstance(stmt, str):
            stmt = literal_text(stmt)
        result = await self.session.execute(stmt)
        # Exactly one row with one field is expected.
        return int(result.scalar_one())
