import argparse
import logging

import uvicorn

from logquery.api import create_app
from logquery.log.schema import MAX_ITEMS
from logquery.log.service import LogService
from logquery.metrics import start_metrics_server
from logquery.store import connect
from logquery.util.log import init_logging


LOG = logging.getLogger(__name__)


def parse_cli_args():
    program = argparse.ArgumentParser(
        description='EVM event log query API'
    )

    program.add_argument(
        '--db',
        default=':memory:',
        metavar='PATH',
        help='DuckDB database holding logs, transactions and receipts (defaults to in-memory)'
    )

    program.add_argument(
        '--host',
        default='127.0.0.1',
        metavar='HOST',
        help='interface to listen on (defaults to 127.0.0.1)'
    )

    program.add_argument(
        '--port',
        type=int,
        default=8000,
        metavar='N',
        help='port to listen on (defaults to 8000)'
    )

    program.add_argument(
        '--max-items',
        type=int,
        default=MAX_ITEMS,
        metavar='N',
        help=f'largest page * offset window a getLogs request may ask for (defaults to {MAX_ITEMS})'
    )

    program.add_argument(
        '--metrics-port',
        type=int,
        metavar='N',
        help='port to serve prometheus metrics on'
    )

    return program.parse_args()


def main():
    args = parse_cli_args()
    init_logging()

    con = connect(args.db)
    app = create_app(LogService(con), max_items=args.max_items)

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    LOG.info(f'listening on {args.host}:{args.port}', extra={'db': args.db})

    config = uvicorn.Config(app, host=args.host, port=args.port, log_config=None)
    uvicorn.Server(config).run()


if __name__ == '__main__':
    main()
