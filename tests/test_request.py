"""Grid request parsing."""

import pytest

from gridquery.request import ColumnRequest, GridRequest, OrderRequest, normalize_request


def test_from_dict_nested_shape():
    req = GridRequest.from_dict({
        'draw': '3',
        'start': '20',
        'length': '10',
        'search': {'value': 'bob', 'regex': 'false'},
        'columns': [
            {'data': 0, 'searchable': 'true', 'orderable': 'true', 'search': {'value': ''}},
            {'data': 'email', 'searchable': 'false', 'orderable': 'false', 'search': {'value': 'x'}},
        ],
        'order': [{'column': '1', 'dir': 'desc'}],
    })
    assert req.draw == 3
    assert req.start == 20
    assert req.length == 10
    assert req.search_value == 'bob'
    assert req.columns[0] == ColumnRequest(data=0, searchable='true', orderable='true', search_value='')
    assert req.columns[1].is_searchable is False
    assert req.columns[1].search_value == 'x'
    assert req.order == (OrderRequest(column=1, dir='desc'),)


def test_missing_paging_fields_mean_all_rows():
    req = GridRequest.from_dict({'draw': 1})
    assert req.start is None
    assert req.length == -1
    assert req.columns == ()
    assert req.has_columns is False


def test_boolean_flags_are_normalized():
    col = ColumnRequest.from_dict({'data': 'a', 'searchable': True, 'orderable': False})
    assert col.searchable == 'true'
    assert col.orderable == 'false'


@pytest.mark.parametrize("raw,expected", [("desc", "DESC"), ("asc", "ASC"), ("DESC", "ASC"), ("", "ASC"), ("down", "ASC")])
def test_only_exact_desc_sorts_descending(raw, expected):
    assert OrderRequest(column=0, dir=raw).direction == expected


def test_non_numeric_order_column_is_out_of_range():
    assert OrderRequest.from_dict({'column': 'abc'}).column == -1


def test_normalize_request():
    req = GridRequest(draw=2)
    assert normalize_request(req) is req
    assert normalize_request({'draw': 5}).draw == 5
    with pytest.raises(TypeError):
        normalize_request(["not", "a", "request"])
