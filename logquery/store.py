import logging
from datetime import datetime
from typing import Iterable, Any

import duckdb

from logquery.topic.codec import to_binary


LOG = logging.getLogger(__name__)


LOG_COLUMNS = [
    'block_number',
    'log_index',
    'transaction_index',
    'transaction_hash',
    'address',
    'topics',
    'data',
    'timestamp'
]


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS logs (
        block_number BIGINT NOT NULL,
        log_index INTEGER NOT NULL,
        transaction_index INTEGER NOT NULL,
        transaction_hash BLOB NOT NULL,
        address BLOB NOT NULL,
        topics BLOB[] NOT NULL,
        data BLOB NOT NULL,
        timestamp TIMESTAMP NOT NULL,
        PRIMARY KEY (block_number, log_index)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        hash BLOB PRIMARY KEY,
        block_number BIGINT NOT NULL,
        transaction_index INTEGER NOT NULL,
        "from" BLOB NOT NULL,
        "to" BLOB,
        gas_price VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transaction_receipts (
        transaction_hash BLOB PRIMARY KEY,
        gas_used VARCHAR NOT NULL
    )
    """
]


def connect(database: str = ':memory:') -> duckdb.DuckDBPyConnection:
    con = duckdb.connect(database)
    for ddl in SCHEMA:
        con.execute(ddl)
    LOG.debug('connected to log store', extra={'database': database})
    return con


def _hex(value: str | None) -> bytes | None:
    return None if value is None else to_binary(value)


def _timestamp(value: str | datetime) -> datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def insert_logs(con: duckdb.DuckDBPyConnection, logs: Iterable[dict[str, Any]]) -> None:
    """Inserts logs given in their JSON form (camelCase keys, 0x-prefixed hex values)"""
    rows = [
        (
            log['blockNumber'],
            log['logIndex'],
            log['transactionIndex'],
            _hex(log['transactionHash']),
            _hex(log['address']),
            [_hex(t) for t in log['topics']],
            _hex(log.get('data', '0x')),
            _timestamp(log['timestamp'])
        )
        for log in logs
    ]
    if rows:
        con.executemany(
            f'INSERT INTO logs ({", ".join(LOG_COLUMNS)}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)',
            rows
        )


def insert_transactions(con: duckdb.DuckDBPyConnection, transactions: Iterable[dict[str, Any]]) -> None:
    rows = [
        (
            _hex(tx['hash']),
            tx['blockNumber'],
            tx['transactionIndex'],
            _hex(tx['from']),
            _hex(tx.get('to')),
            str(tx['gasPrice'])
        )
        for tx in transactions
    ]
    if rows:
        con.executemany(
            'INSERT INTO transactions (hash, block_number, transaction_index, "from", "to", gas_price) '
            'VALUES (?, ?, ?, ?, ?, ?)',
            rows
        )


def insert_receipts(con: duckdb.DuckDBPyConnection, receipts: Iterable[dict[str, Any]]) -> None:
    rows = [
        (_hex(r['transactionHash']), str(r['gasUsed']))
        for r in receipts
    ]
    if rows:
        con.executemany(
            'INSERT INTO transaction_receipts (transaction_hash, gas_used) VALUES (?, ?)',
            rows
        )
