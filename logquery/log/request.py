from typing import Any, Mapping

import marshmallow as mm

from logquery.topic.codec import parse_topic, parse_address
from logquery.topic.operator import parse_operator
from logquery.topic.params import OPERATOR_KEYS, normalize_topic_params
from .schema import GetLogsSchema, ListLogsSchema


def _load(schema: mm.Schema, params: Mapping[str, Any]) -> dict:
    fields = {k: v for k, v in params.items() if k in schema.fields and v != ''}
    return schema.load(fields, unknown=mm.EXCLUDE)


def parse_get_logs_request(params: Mapping[str, Any], schema: GetLogsSchema | None = None) -> dict[str, Any]:
    """
    Turns raw query string parameters of a getLogs request
    into keyword arguments of `LogService.find_many()`.

    Raises `InvalidParam` subclasses or `marshmallow.ValidationError`.
    """
    address = parse_address(params.get('address'), required=False)

    paging = _load(schema or GetLogsSchema(), params)

    topics = [
        parse_topic(params.get(f'topic{i}'), required=False, error_message='Error! Invalid topic format')
        for i in range(4)
    ]

    operators = {}
    for key, (i, j) in OPERATOR_KEYS.items():
        operators[key] = parse_operator(
            params.get(key),
            required=False,
            error_message=f"Error! {key} must be 'and' or 'or' when topic{i} and topic{j} are provided"
        )

    return {
        'address': address,
        'from_block': paging.get('fromBlock'),
        'to_block': paging.get('toBlock'),
        'page': paging['page'],
        'offset': paging['offset'],
        'topics': normalize_topic_params(topics, operators)
    }


def parse_list_logs_request(params: Mapping[str, Any]) -> dict[str, Any]:
    q = _load(ListLogsSchema(), params)
    filter_options = {}
    address = parse_address(q.get('address'), required=False)
    if address is not None:
        filter_options['address'] = address
    if 'transactionHash' in q:
        filter_options['transactionHash'] = q['transactionHash'].lower()
    return {
        'filter_options': filter_options,
        'page': q['page'],
        'limit': q['limit']
    }
