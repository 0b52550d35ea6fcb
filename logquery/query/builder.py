import logging
from typing import Any, Iterable, Mapping

import duckdb

from logquery.errors import QueryExecutionError
from .util import WhereExp, And, Bin, print_where, param, to_snake_case


LOG = logging.getLogger(__name__)


Row = dict[str, Any]
Condition = WhereExp | Mapping[str, Any]


class SelectQueryBuilder:
    """
    Accumulates a single table SELECT and runs it on a DuckDB connection.

    Conditions reference values through named parameters (`$name`),
    a parameter name can be bound only once per query.
    """

    def __init__(self, con: duckdb.DuckDBPyConnection, table: str, alias: str, columns: Iterable[str]):
        self._con = con
        self._table = table
        self._alias = alias
        self._columns = [f'{alias}.{c}' for c in columns]
        self._joins: list[str] = []
        self._where: list[WhereExp] = []
        self._params: dict[str, Any] = {}
        self._order: list[str] = []
        self._offset: int | None = None
        self._limit: int | None = None

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def wheres(self) -> list[WhereExp]:
        return list(self._where)

    def get_parameters(self) -> dict[str, Any]:
        return dict(self._params)

    def where(self, condition: Condition, params: Mapping[str, Any] | None = None) -> 'SelectQueryBuilder':
        # every bound parameter belongs to one of the replaced conditions
        self._where = []
        self._params = {}
        return self.and_where(condition, params)

    def and_where(self, condition: Condition, params: Mapping[str, Any] | None = None) -> 'SelectQueryBuilder':
        if isinstance(condition, Mapping):
            condition = self._equals(condition)
        else:
            self._bind(params or {})
        self._where.append(condition)
        return self

    def left_join(self, table: str, alias: str, on: str) -> 'SelectQueryBuilder':
        self._joins.append(f'LEFT JOIN {table} AS {alias} ON {on}')
        return self

    def add_select(self, columns: Iterable[str]) -> 'SelectQueryBuilder':
        self._columns.extend(columns)
        return self

    def order_by(self, column: str, order: str = 'ASC') -> 'SelectQueryBuilder':
        self._order = []
        return self.add_order_by(column, order)

    def add_order_by(self, column: str, order: str = 'ASC') -> 'SelectQueryBuilder':
        assert order in ('ASC', 'DESC')
        self._order.append(f'{column} {order}')
        return self

    def offset(self, offset: int) -> 'SelectQueryBuilder':
        self._offset = int(offset)
        return self

    def limit(self, limit: int) -> 'SelectQueryBuilder':
        self._limit = int(limit)
        return self

    def get_sql(self) -> str:
        sql = self._select()
        if self._order:
            sql += f" ORDER BY {', '.join(self._order)}"
        if self._limit is not None:
            sql += f" LIMIT {self._limit}"
        if self._offset is not None:
            sql += f" OFFSET {self._offset}"
        return sql

    def get_many(self) -> list[Row]:
        sql = self.get_sql()
        LOG.debug('executing query', extra={'sql': sql, 'params': list(self._params)})
        return self._execute(sql)

    def get_count(self) -> int:
        sql = f'SELECT COUNT(*) AS count FROM ({self._select()})'
        return self._execute(sql)[0]['count']

    def _select(self) -> str:
        sql = f"SELECT {', '.join(self._columns)} FROM {self._table} AS {self._alias}"
        for join in self._joins:
            sql += f' {join}'
        where = print_where(And(self._where))
        if where:
            sql += f' WHERE {where}'
        return sql

    def _execute(self, sql: str) -> list[Row]:
        cursor = self._con.cursor()
        try:
            cursor.execute(sql, self._params or None)
            columns = [d[0] for d in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except duckdb.Error as e:
            err = QueryExecutionError(str(e))
            err.add_note(f'sql: {sql}')
            raise err from e
        finally:
            cursor.close()

    def _equals(self, values: Mapping[str, Any]) -> WhereExp:
        conditions = []
        for key, value in values.items():
            column = to_snake_case(key)
            self._bind({column: value})
            conditions.append(Bin('=', f'{self._alias}.{column}', param(column)))
        return And(conditions)

    def _bind(self, params: Mapping[str, Any]) -> None:
        for name, value in params.items():
            if name in self._params:
                raise ValueError(f'query parameter ${name} is already bound')
            self._params[name] = value
