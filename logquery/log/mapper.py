from datetime import datetime, timezone
from typing import Any

from logquery.query.builder import Row
from logquery.topic.codec import from_binary


def _quantity(value: int | str | None) -> str | None:
    if value is None:
        return None
    return hex(int(value))


def _unix_time(ts: datetime) -> int:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return int(ts.timestamp())


def map_log_list_item(row: Row) -> dict[str, Any]:
    return {
        'address': from_binary(row['address']),
        'topics': [from_binary(t) for t in row['topics']],
        'data': from_binary(row['data']),
        'blockNumber': _quantity(row['block_number']),
        'timeStamp': _quantity(_unix_time(row['timestamp'])),
        'gasPrice': _quantity(row.get('gas_price')),
        'gasUsed': _quantity(row.get('gas_used')),
        'logIndex': _quantity(row['log_index']),
        'transactionHash': from_binary(row['transaction_hash']),
        'transactionIndex': _quantity(row['transaction_index']),
    }


def map_log(row: Row) -> dict[str, Any]:
    return {
        'address': from_binary(row['address']),
        'blockNumber': row['block_number'],
        'transactionHash': from_binary(row['transaction_hash']),
        'transactionIndex': row['transaction_index'],
        'topics': [from_binary(t) for t in row['topics']],
        'data': from_binary(row['data']),
        'logIndex': row['log_index'],
        'timestamp': row['timestamp'].isoformat(),
    }
