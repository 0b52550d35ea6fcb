import logging
import os
import sys
from functools import cache


# namespaces listed in LOGQ_<LEVEL> get that level,
# the longest matching namespace wins and everything else logs at INFO
_ENV_LEVELS = {
    'LOGQ_DEBUG': logging.DEBUG,
    'LOGQ_INFO': logging.INFO,
    'LOGQ_WARN': logging.WARNING,
    'LOGQ_ERROR': logging.ERROR,
    'LOGQ_FATAL': logging.CRITICAL,
}


@cache
def _namespace_levels() -> list[tuple[str, int]]:
    levels = []
    for var, level in _ENV_LEVELS.items():
        for pattern in os.getenv(var, '').split(','):
            pattern = pattern.strip()
            if pattern:
                levels.append((pattern.removesuffix('*').removesuffix('.'), level))
    levels.sort(key=lambda item: len(item[0]), reverse=True)
    return levels


def get_log_level(name: str) -> int:
    for ns, level in _namespace_levels():
        if not ns or name == ns or name.startswith(ns + '.'):
            return level
    return logging.INFO


_RECORD_ATTRIBUTES = set(
    logging.LogRecord('dummy', logging.INFO, '', 1, '', (), None).__dict__
) | {'message', 'asctime', 'color_message', 'taskName'}


_LEVEL_COLORS = {
    logging.DEBUG: '\033[1m\033[32m',
    logging.INFO: '\033[1m\033[36m',
    logging.WARNING: '\033[1m\033[33m',
    logging.ERROR: '\033[1m\033[31m',
    logging.CRITICAL: '\033[1m\033[31m',
}


class TextFormatter(logging.Formatter):
    """Formats `time level logger message` followed by the record's `extra` fields as key=value pairs"""

    def __init__(self, colorful: bool = False):
        super().__init__()
        self.colorful = colorful

    def formatMessage(self, rec: logging.LogRecord) -> str:
        level = rec.levelname
        kvs = ''.join(f' {k}={v!r}' for k, v in rec.__dict__.items() if k not in _RECORD_ATTRIBUTES)
        if self.colorful:
            level = f'{_LEVEL_COLORS.get(rec.levelno, "")}{level}\033[0m'
            kvs = kvs and f'\033[2m{kvs}\033[0m'
        time = self.formatTime(rec, '%H:%M:%S')
        return f'{time} {level} {rec.name} {rec.message}{kvs}'


class _NamespaceFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= get_log_level(record.name)


def init_logging():
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(TextFormatter(colorful=sys.stderr.isatty()))
    h.addFilter(_NamespaceFilter())
    logging.basicConfig(
        level=logging.NOTSET,
        handlers=[h]
    )
