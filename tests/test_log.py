import logging

import pytest

from logquery.util import log


@pytest.fixture
def env(monkeypatch):
    for var in log._ENV_LEVELS:
        monkeypatch.delenv(var, raising=False)
    log._namespace_levels.cache_clear()
    yield monkeypatch
    log._namespace_levels.cache_clear()


def test_default_level(env):
    assert log.get_log_level('logquery.api') == logging.INFO


def test_namespace_patterns(env):
    env.setenv('LOGQ_DEBUG', 'logquery.log.*')
    env.setenv('LOGQ_ERROR', 'logquery')
    assert log.get_log_level('logquery.log.service') == logging.DEBUG
    assert log.get_log_level('logquery.api') == logging.ERROR
    assert log.get_log_level('logquery_other') == logging.INFO
    assert log.get_log_level('uvicorn.error') == logging.INFO


def test_wildcard(env):
    env.setenv('LOGQ_WARN', '*')
    env.setenv('LOGQ_DEBUG', 'logquery.query, logquery.store')
    assert log.get_log_level('uvicorn.error') == logging.WARNING
    assert log.get_log_level('logquery.query.builder') == logging.DEBUG
    assert log.get_log_level('logquery.store') == logging.DEBUG


def test_text_formatter_appends_extra_fields():
    rec = logging.LogRecord('logquery.api', logging.WARNING, '', 1, 'bad request', (), None)
    rec.description = 'Invalid topic format'
    line = log.TextFormatter().format(rec)
    assert line.endswith(" WARNING logquery.api bad request description='Invalid topic format'")
