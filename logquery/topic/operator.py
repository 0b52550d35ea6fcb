from enum import Enum

from logquery.errors import InvalidOperator, MissingOperator


class TopicOperator(str, Enum):
    AND = 'AND'
    OR = 'OR'


_OPERATORS = {
    'and': TopicOperator.AND,
    'or': TopicOperator.OR,
}


def parse_operator(
        value: str | None,
        required: bool = True,
        error_message: str = "operator must be 'and' or 'or'"
) -> TopicOperator | None:
    if not value:
        if required:
            raise MissingOperator(error_message)
        return None

    if not isinstance(value, str):
        raise InvalidOperator(error_message)

    # exact match only, "AND" or " and" are rejected
    operator = _OPERATORS.get(value)
    if operator is None:
        raise InvalidOperator(error_message)
    return operator
