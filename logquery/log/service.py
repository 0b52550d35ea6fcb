import logging
from typing import TypedDict, Any, Mapping

import duckdb

from logquery.query.builder import SelectQueryBuilder, Row, Condition
from logquery.query.paginate import Pagination, paginate
from logquery.query.util import And, Or, Bin, Contains, param
from logquery.store import LOG_COLUMNS
from logquery.topic.codec import to_binary
from logquery.topic.operator import TopicOperator
from logquery.topic.params import TopicFilter


LOG = logging.getLogger(__name__)


class FilterLogsOptions(TypedDict, total=False):
    transactionHash: str
    address: str


_COMBINATORS = {
    TopicOperator.AND: And,
    TopicOperator.OR: Or,
}


def _apply_where(
        qb: SelectQueryBuilder,
        has_where: bool,
        condition: Condition,
        params: Mapping[str, Any] | None = None
) -> bool:
    # the first condition must set the predicate, the following ones extend it
    if has_where:
        qb.and_where(condition, params)
    else:
        qb.where(condition, params)
    return True


def _topics_condition(topics: TopicFilter) -> tuple[Condition, dict[str, bytes]] | None:
    if topics is None:
        return None

    if isinstance(topics, str):
        return Contains('log.topics', param('topic')), {'topic': to_binary(topics)}

    conditions = []
    params = {}
    # topics are compared as binary values, each clause gets its own parameter pair
    for i, clause in enumerate(topics):
        topic_a, topic_b = clause.topics
        param_a = f'topic{i}a'
        param_b = f'topic{i}b'
        params[param_a] = to_binary(topic_a)
        params[param_b] = to_binary(topic_b)
        combinator = _COMBINATORS[TopicOperator(clause.operator)]
        conditions.append(combinator([
            Contains('log.topics', param(param_a)),
            Contains('log.topics', param(param_b))
        ]))

    if not conditions:
        return None

    return And(conditions), params


class LogService:
    def __init__(self, con: duckdb.DuckDBPyConnection):
        self._con = con

    def create_query_builder(self) -> SelectQueryBuilder:
        return SelectQueryBuilder(self._con, 'logs', 'log', LOG_COLUMNS)

    def find_all(
            self,
            filter_options: FilterLogsOptions | None = None,
            page: int = 1,
            limit: int = 10,
            route: str | None = None
    ) -> Pagination[Row]:
        qb = self.create_query_builder()
        qb.where({
            key: to_binary(value) for key, value in (filter_options or {}).items() if value is not None
        })
        qb.order_by('log.timestamp', 'DESC')
        qb.add_order_by('log.log_index', 'ASC')
        return paginate(qb, page, limit, route)

    def find_many(
            self,
            address: str | None = None,
            from_block: int | None = None,
            to_block: int | None = None,
            page: int = 1,
            offset: int = 10,
            topics: TopicFilter = None
    ) -> list[Row]:
        """
        Returns logs matching the given address, block range and topics filter,
        sorted by block number and log index.

        `offset` is the page size, the number of skipped rows is derived from it
        and the 1-based `page`.
        """
        qb = self.create_query_builder()
        qb.left_join('transactions', '"transaction"', '"transaction".hash = log.transaction_hash')
        qb.left_join(
            'transaction_receipts',
            '"transactionReceipt"',
            '"transactionReceipt".transaction_hash = "transaction".hash'
        )
        qb.add_select(['"transaction".gas_price AS gas_price', '"transactionReceipt".gas_used AS gas_used'])

        has_where = False

        if address is not None:
            has_where = _apply_where(qb, has_where, {'address': to_binary(address)})

        topics_condition = _topics_condition(topics)
        if topics_condition is not None:
            condition, params = topics_condition
            has_where = _apply_where(qb, has_where, condition, params)

        if from_block is not None:
            has_where = _apply_where(
                qb, has_where, Bin('>=', 'log.block_number', param('from_block')), {'from_block': from_block}
            )

        if to_block is not None:
            has_where = _apply_where(
                qb, has_where, Bin('<=', 'log.block_number', param('to_block')), {'to_block': to_block}
            )

        qb.offset((page - 1) * offset)
        qb.limit(offset)
        qb.order_by('log.block_number', 'ASC')
        qb.add_order_by('log.log_index', 'ASC')
        return qb.get_many()
