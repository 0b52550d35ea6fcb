import pytest

from logquery.errors import QueryExecutionError
from logquery.query.builder import SelectQueryBuilder
from logquery.query.paginate import paginate
from logquery.query.util import And, Or, Bin, Contains, print_where
from tests.conftest import WETH


def test_print_where():
    exp = And([
        Bin('=', 'log.address', '$address'),
        Or([Contains('log.topics', '$topic0a'), Contains('log.topics', '$topic0b')]),
    ])
    assert print_where(exp) == (
        '(log.address = $address) AND '
        '((list_contains(log.topics, $topic0a)) OR (list_contains(log.topics, $topic0b)))'
    )
    assert print_where(And([])) == ''


def test_sql(con):
    qb = SelectQueryBuilder(con, 'logs', 'log', ['block_number', 'log_index'])
    qb.where({'address': b'\x01'})
    qb.and_where(Bin('>=', 'log.block_number', '$from_block'), {'from_block': 5})
    qb.order_by('log.block_number').add_order_by('log.log_index')
    qb.offset(20).limit(10)
    assert qb.get_sql() == (
        'SELECT log.block_number, log.log_index FROM logs AS log '
        'WHERE ((log.address = $address)) AND (log.block_number >= $from_block) '
        'ORDER BY log.block_number ASC, log.log_index ASC LIMIT 10 OFFSET 20'
    )
    assert qb.get_parameters() == {'address': b'\x01', 'from_block': 5}


def test_where_replaces_previous_conditions(con):
    qb = SelectQueryBuilder(con, 'logs', 'log', ['block_number', 'log_index']).order_by('log.log_index')
    qb.where(Bin('>=', 'log.block_number', '$from_block'), {'from_block': 5})
    qb.where(Bin('<=', 'log.block_number', '$to_block'), {'to_block': 100})
    assert qb.wheres == [Bin('<=', 'log.block_number', '$to_block')]
    assert qb.get_parameters() == {'to_block': 100}
    assert qb.get_many() == [
        {'block_number': 100, 'log_index': 0},
        {'block_number': 100, 'log_index': 1},
    ]
    qb.where(Bin('=', 'log.block_number', '$to_block'), {'to_block': 101})
    assert qb.get_count() == 1


def test_parameter_names_must_not_repeat(con):
    qb = SelectQueryBuilder(con, 'logs', 'log', ['log_index'])
    qb.where(Bin('>=', 'log.block_number', '$block'), {'block': 5})
    with pytest.raises(ValueError):
        qb.and_where(Bin('<=', 'log.block_number', '$block'), {'block': 7})


def test_get_many(con):
    qb = SelectQueryBuilder(con, 'logs', 'log', ['block_number', 'log_index'])
    qb.where({'address': bytes.fromhex(WETH[2:])})
    qb.order_by('log.block_number', 'DESC').add_order_by('log.log_index', 'DESC').limit(2)
    assert qb.get_many() == [
        {'block_number': 102, 'log_index': 3},
        {'block_number': 102, 'log_index': 2},
    ]
    assert qb.get_count() == 4


def test_execution_error(con):
    qb = SelectQueryBuilder(con, 'no_such_table', 't', ['x'])
    with pytest.raises(QueryExecutionError):
        qb.get_many()


def test_paginate(con):
    qb = SelectQueryBuilder(con, 'logs', 'log', ['block_number', 'log_index'])
    qb.order_by('log.block_number').add_order_by('log.log_index')
    page = paginate(qb, page=2, limit=2, route='/api/logs')
    assert page.items == [
        {'block_number': 101, 'log_index': 0},
        {'block_number': 102, 'log_index': 2},
    ]
    assert page.meta.totalItems == 5
    assert page.meta.totalPages == 3
    assert page.links == {
        'first': '/api/logs?page=1&limit=2',
        'previous': '/api/logs?page=1&limit=2',
        'next': '/api/logs?page=3&limit=2',
        'last': '/api/logs?page=3&limit=2',
    }
