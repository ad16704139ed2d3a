"""Placeholder substitution."""

import pytest

from gridquery.core.template import render_template, require_distinct, require_single
from gridquery.errors import PlaceholderMismatchError


def test_render_replaces_every_token():
    sql = render_template("SELECT * FROM t {cond} {order} {limit}", {'{cond}': 'WHERE a = 1', '{order}': '', '{limit}': 'LIMIT 5 OFFSET 0'})
    assert sql == "SELECT * FROM t WHERE a = 1  LIMIT 5 OFFSET 0"


def test_generated_text_is_not_rescanned():
    # A search term that happens to contain another placeholder stays literal.
    sql = render_template("SELECT * FROM t {cond} {order}", {'{cond}': "WHERE a LIKE '%{order}%'", '{order}': 'ORDER BY a ASC'})
    assert sql == "SELECT * FROM t WHERE a LIKE '%{order}%' ORDER BY a ASC"


def test_longer_token_wins_over_prefix():
    assert render_template("x #L #LIMIT", {'#L': 'a', '#LIMIT': 'b'}) == "x a b"


def test_no_tokens_returns_template():
    assert render_template("SELECT 1", {}) == "SELECT 1"
    assert render_template("SELECT 1", {'': 'x'}) == "SELECT 1"


def test_require_single():
    require_single("a ? b", "?", where='caster')
    with pytest.raises(PlaceholderMismatchError, match="found 0"):
        require_single("a b", "?", where='caster')
    with pytest.raises(PlaceholderMismatchError, match="found 2"):
        require_single("? ?", "?", where='caster')


def test_require_distinct_ignores_unset():
    require_distinct(['{a}', None, '{b}', ''], where='template')
    with pytest.raises(PlaceholderMismatchError):
        require_distinct(['{a}', '{a}'], where='template')
