"""Sort term construction."""

from gridquery.config import ColumnSpec
from gridquery.core.columns import ColumnResolver
from gridquery.core.ordering import build_order_terms, render_order_text
from gridquery.request import ColumnRequest, GridRequest, OrderRequest

COLUMNS = [ColumnSpec(col='name', dt=0), ColumnSpec(col='age', dt=1), ColumnSpec(col='city', dt=2, alias='c')]


def _request(order, orderable=('true', 'true', 'true'), data=(0, 1, 2)):
    cols = tuple(ColumnRequest(data=d, orderable=o) for d, o in zip(data, orderable))
    return GridRequest(draw=1, columns=cols, order=tuple(OrderRequest(column=c, dir=d) for c, d in order))


def _render(request, start_column=0, pre_ordered=False):
    terms = build_order_terms(request, ColumnResolver(COLUMNS), start_column)
    return render_order_text(terms, pre_ordered=pre_ordered)


def test_single_desc():
    assert _render(_request([(0, 'desc')])) == 'ORDER BY name DESC'


def test_request_order_is_preserved():
    assert _render(_request([(1, 'desc'), (0, 'asc')])) == 'ORDER BY age DESC, name ASC'
    assert _render(_request([(0, 'asc'), (1, 'desc')])) == 'ORDER BY name ASC, age DESC'


def test_alias_qualifies_order_term():
    assert _render(_request([(2, 'asc')])) == 'ORDER BY c.city ASC'


def test_unknown_direction_defaults_to_asc():
    assert _render(_request([(0, 'DESC'), (1, 'sideways')])) == 'ORDER BY name ASC, age ASC'


def test_non_orderable_and_out_of_range_entries_dropped():
    req = _request([(5, 'desc'), (0, 'desc'), (-1, 'asc'), (1, 'asc')], orderable=('true', 'false', 'true'))
    assert _render(req) == 'ORDER BY name DESC'


def test_unresolved_column_dropped():
    req = _request([(0, 'asc'), (1, 'desc')], data=('edit', 1, 2))
    assert _render(req) == 'ORDER BY age DESC'


def test_entries_before_start_column_dropped():
    assert _render(_request([(0, 'asc'), (1, 'desc')]), start_column=1) == 'ORDER BY age DESC'


def test_pre_ordered_continues_existing_clause():
    assert _render(_request([(0, 'asc'), (1, 'desc')]), pre_ordered=True) == ', name ASC, age DESC'


def test_no_terms_renders_empty():
    assert _render(_request([])) == ''
    assert _render(_request([(0, 'asc')]), pre_ordered=True, start_column=3) == ''


def test_terms_carry_direction():
    terms = build_order_terms(_request([(1, 'desc')]), ColumnResolver(COLUMNS), 0)
    assert terms[0].spec.col == 'age'
    assert terms[0].descending is True


def test_negative_index_dropped_even_with_negative_start_column():
    req = _request([(-1, 'desc'), (0, 'asc')])
    assert _render(req, start_column=-1) == 'ORDER BY name ASC'
    assert _render(_request([(-1, 'desc')]), start_column=-3) == ''
