"""gridquery: server-side processing for data grids over SQLAlchemy.

Translates a grid request (paging, multi-column sort, global and per-column
search) into a composed SQLAlchemy select or a rendered SQL template, runs
it together with the total and filtered counts, and returns the
``{draw, recordsTotal, recordsFiltered, data}`` envelope.
"""
from __future__ import annotations

from .adapters import BaseAdapter, get_adapter, adapter_for_bind
from .config import ColumnSpec, QueryBundle, StringCaster
from .engine import GridEngine
from .errors import ConfigurationMissingError, GridQueryError, PlaceholderMismatchError
from .executor import GridExecutor, SessionExecutor
from .request import ColumnRequest, GridRequest, OrderRequest
from .response import ResponseEnvelope

__all__ = [
    'GridEngine',
    'GridRequest', 'ColumnRequest', 'OrderRequest',
    'ColumnSpec', 'QueryBundle', 'StringCaster',
    'ResponseEnvelope',
    'GridExecutor', 'SessionExecutor',
    'BaseAdapter', 'get_adapter', 'adapter_for_bind',
    'GridQueryError', 'ConfigurationMissingError', 'PlaceholderMismatchError',
]
