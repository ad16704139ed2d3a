"""Caller-supplied configuration: backend columns and the query bundle.

``ColumnSpec`` maps one backend column to the client column identifier it
answers to. ``QueryBundle`` carries everything a backend needs beyond the
request itself: the raw statement templates and their placeholders, the
count statement, and the operator/caster pair used to build text search
predicates.

Both are treated as read-only configuration; the engine never mutates them.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Optional, TYPE_CHECKING

from .core.template import require_distinct, require_single
from .errors import ConfigurationMissingError

if TYPE_CHECKING:
    from .adapters.base import BaseAdapter

__all__ = [
    "DEFAULT_LIKE_OPERATOR",
    "DEFAULT_CASTER",
    "DEFAULT_CASTER_SPECIFIER",
    "ColumnSpec",
    "StringCaster",
    "QueryBundle",
]

DEFAULT_LIKE_OPERATOR = 'LIKE'
DEFAULT_CASTER = 'CAST(? AS VARCHAR)'
DEFAULT_CASTER_SPECIFIER = '?'


@dataclass(frozen=True)
class ColumnSpec:
    col: str
    dt: Any
    alias: Optional[str] = None

    @property
    def qualified(self) -> str:
        return f"{self.alias}.{self.col}" if self.alias else self.col

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ColumnSpec":
        return cls(col=raw['col'], dt=raw.get('dt'), alias=raw.get('alias') or None)


@dataclass(frozen=True)
class StringCaster:
    """SQL expression casting a column to text, e.g. ``CAST(? AS VARCHAR)``."""

    expression: str = DEFAULT_CASTER
    specifier: str = DEFAULT_CASTER_SPECIFIER

    def validate(self) -> None:
        require_single(self.expression, self.specifier, where='to_string_caster')

    def apply(self, column_ref: str) -> str:
        return self.expression.replace(self.specifier, column_ref, 1)


def _truthy(value: Any) -> bool:
    # Form posts carry flags as strings; 'false' and '0' must stay false.
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1')


_BUNDLE_KEYS = (
    'primary_key',
    'table_name',
    'query_container',
    'base_count_query',
    'base_count_query_cond_specifier',
    'non_case_sensitive_like_operator',
    'specifier_cond',
    'specifier_order',
    'specifier_limit',
    'specifier_additional',
    'pre_ordered',
    'to_string_caster',
    'to_string_caster_specifier',
)


@dataclass(frozen=True)
class QueryBundle:
    """Backend configuration for one kind of grid request.

    Single-table backends use ``primary_key`` / ``table_name`` and may supply
    ``base_count_query``. The template backend requires ``query_container``
    with the condition, order and limit placeholders, plus the count
    statement and its condition placeholder. ``specifier_additional`` is an
    optional second slot receiving the offset when the limit and offset must
    be written as separate tokens. ``pre_ordered`` marks a template whose
    ORDER BY is already open, so generated terms continue it.
    """

    primary_key: Optional[str] = None
    table_name: Optional[str] = None
    query_container: Optional[str] = None
    base_count_query: Optional[str] = None
    base_count_query_cond_specifier: Optional[str] = None
    non_case_sensitive_like_operator: Optional[str] = None
    specifier_cond: Optional[str] = None
    specifier_order: Optional[str] = None
    specifier_limit: Optional[str] = None
    specifier_additional: Optional[str] = None
    pre_ordered: bool = False
    to_string_caster: Optional[str] = None
    to_string_caster_specifier: Optional[str] = None

    @property
    def like_operator(self) -> str:
        return self.non_case_sensitive_like_operator or DEFAULT_LIKE_OPERATOR

    @property
    def caster(self) -> StringCaster:
        return StringCaster(
            expression=self.to_string_caster or DEFAULT_CASTER,
            specifier=self.to_string_caster_specifier or DEFAULT_CASTER_SPECIFIER,
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "QueryBundle":
        """Build a bundle from the associative form; unknown keys are ignored."""
        known = {k: raw[k] for k in _BUNDLE_KEYS if k in raw}
        if 'pre_ordered' in known:
            known['pre_ordered'] = _truthy(known['pre_ordered'])
        return cls(**known)

    def for_dialect(self, adapter: "BaseAdapter") -> "QueryBundle":
        """Fill the operator and caster from a dialect adapter where unset."""
        updates: dict = {}
        if not self.non_case_sensitive_like_operator:
            updates['non_case_sensitive_like_operator'] = adapter.like_operator
        if not self.to_string_caster:
            updates['to_string_caster'] = adapter.caster
            updates['to_string_caster_specifier'] = adapter.caster_specifier
        return dataclasses.replace(self, **updates) if updates else self

    # --- validation ---------------------------------------------------------
    def _validate_count_query(self, *, required: bool) -> None:
        if not self.base_count_query:
            if required:
                raise ConfigurationMissingError("base_count_query is required")
            return
        if not self.base_count_query_cond_specifier:
            raise ConfigurationMissingError("base_count_query_cond_specifier is required with base_count_query")
        require_single(self.base_count_query, self.base_count_query_cond_specifier, where='base_count_query')

    def validate_for_structured(self) -> None:
        self.caster.validate()
        self._validate_count_query(required=False)

    def validate_for_template(self) -> None:
        if not self.query_container:
            raise ConfigurationMissingError("query_container is required for template queries")
        for name in ('specifier_cond', 'specifier_order', 'specifier_limit'):
            if not getattr(self, name):
                raise ConfigurationMissingError(f"{name} is required for template queries")
        self.caster.validate()
        self._validate_count_query(required=True)
        specifiers = (
            self.specifier_cond,
            self.specifier_order,
            self.specifier_limit,
            self.specifier_additional,
        )
        require_distinct(specifiers, where='query_container')
        for token in specifiers:
            if token:
                require_single(self.query_container, token, where='query_container')
