import os

import pytest

from logquery.log.service import LogService
from tests.run import load_store


DATA_FILE = os.path.join(os.path.dirname(__file__), 'logs', 'data.json')

TOPIC_TRANSFER = '0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef'
TOPIC_APPROVAL = '0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925'
TOPIC_HOLDER_1 = '0x0000000000000000000000001111111111111111111111111111111111111111'
TOPIC_HOLDER_2 = '0x0000000000000000000000002222222222222222222222222222222222222222'

WETH = '0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2'
USDC = '0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48'


@pytest.fixture
def con():
    con = load_store(DATA_FILE)
    yield con
    con.close()


@pytest.fixture
def service(con) -> LogService:
    return LogService(con)
