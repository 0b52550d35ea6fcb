import glob
import json
import os
import sys
from typing import NamedTuple, Any, Iterable

import duckdb

from logquery.log.mapper import map_log_list_item
from logquery.log.request import parse_get_logs_request
from logquery.log.service import LogService
from logquery.store import connect, insert_logs, insert_transactions, insert_receipts


SUITES = [
    os.path.join(os.path.dirname(__file__), 'logs')
]


class Fixture(NamedTuple):
    name: str
    data_file: str
    query: Any
    result: Any


def get_fixtures(suite_dir: str) -> Iterable[Fixture]:
    data_file = os.path.join(suite_dir, 'data.json')
    query_files = glob.glob('fixtures/*/query.json', root_dir=suite_dir)
    query_files.sort()
    for query_file in query_files:
        fixture_dir = os.path.join(suite_dir, os.path.dirname(query_file))
        fixture_name = os.path.basename(fixture_dir)
        query_file = os.path.join(fixture_dir, 'query.json')
        result_file = os.path.join(fixture_dir, 'result.json')

        with open(query_file) as f:
            query = json.load(f)

        with open(result_file) as f:
            result = json.load(f)

        yield Fixture(fixture_name, data_file, query, result)


def load_store(data_file: str) -> duckdb.DuckDBPyConnection:
    with open(data_file) as f:
        data = json.load(f)
    con = connect()
    insert_logs(con, data['logs'])
    insert_transactions(con, data['transactions'])
    insert_receipts(con, data['receipts'])
    return con


def execute_fixture_query(fixture: Fixture) -> list:
    con = load_store(fixture.data_file)
    try:
        args = parse_get_logs_request(fixture.query)
        logs = LogService(con).find_many(**args)
        return [map_log_list_item(log) for log in logs]
    finally:
        con.close()


def run_test_suite(suite_dir: str) -> None:
    suite_name = os.path.basename(suite_dir)
    for fixture in get_fixtures(suite_dir):
        print(f'test {suite_name}/{fixture.name}: ', end='')
        result = execute_fixture_query(fixture)
        if result == fixture.result:
            print('ok')
        else:
            print('failed')
            with open(os.path.join(suite_dir, 'fixtures', fixture.name, 'actual.temp.json'), 'w') as f:
                json.dump(result, f, indent=2)
            sys.exit(1)


def main():
    for suite_dir in SUITES:
        run_test_suite(suite_dir)


if __name__ == '__main__':
    main()
