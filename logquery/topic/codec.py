import re
from typing import Any

from logquery.errors import InvalidTopicFormat, InvalidAddress


Topic = str


_TOPIC_RE = re.compile(r'(0x)?[0-9a-f]{64}')
_ADDRESS_RE = re.compile(r'0x[0-9a-f]{40}')


def canonicalize(raw: str, error_message: str = 'Invalid topic format') -> Topic:
    if not isinstance(raw, str):
        raise InvalidTopicFormat(error_message)
    topic = raw.lower()
    if not _TOPIC_RE.fullmatch(topic):
        raise InvalidTopicFormat(error_message)
    return topic


def parse_topic(
        value: Any,
        required: bool = True,
        each: bool = False,
        error_message: str = 'Invalid topic format'
) -> Topic | list[Topic] | None:
    """
    Validates a topic query parameter.

    With `each=True` the value must be a list and every element is canonicalized,
    otherwise the value must be a single string. A missing value is only accepted
    when the parameter is not required.
    """
    if not required and (value is None or value == ''):
        return None

    if each:
        if not isinstance(value, list):
            raise InvalidTopicFormat(error_message)
        return [canonicalize(v, error_message) for v in value]

    if isinstance(value, list):
        raise InvalidTopicFormat(error_message)

    return canonicalize(value, error_message)


def to_binary(value: str) -> bytes:
    if value.startswith('0x'):
        value = value[2:]
    return bytes.fromhex(value)


def from_binary(value: bytes | None) -> str | None:
    if value is None:
        return None
    return '0x' + value.hex()


def parse_address(
        value: Any,
        required: bool = True,
        error_message: str = 'Error! Invalid address format'
) -> str | None:
    if not value:
        if required:
            raise InvalidAddress(error_message)
        return None
    if not isinstance(value, str):
        raise InvalidAddress(error_message)
    address = value.lower()
    if not _ADDRESS_RE.fullmatch(address):
        raise InvalidAddress(error_message)
    return address
