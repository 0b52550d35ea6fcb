from typing import NamedTuple, Sequence, Mapping

from logquery.errors import UnexpectedOperator, MissingOperators, MissingTopicForOperator
from .codec import Topic
from .operator import TopicOperator


class TopicClause(NamedTuple):
    topics: tuple[Topic, Topic]
    operator: TopicOperator


TopicFilter = Topic | list[TopicClause] | None


# operator parameter -> indexes of the topics it combines,
# in the order clauses are emitted
OPERATOR_KEYS: dict[str, tuple[int, int]] = {
    'topic0_1_opr': (0, 1),
    'topic1_2_opr': (1, 2),
    'topic2_3_opr': (2, 3),
    'topic0_2_opr': (0, 2),
    'topic0_3_opr': (0, 3),
    'topic1_3_opr': (1, 3),
}


def normalize_topic_params(
        topics: Sequence[Topic | None],
        operators: Mapping[str, TopicOperator | str | None] | None = None,
        error_message: str = 'Invalid topic params'
) -> TopicFilter:
    """
    Combines up to four topics and the pairwise operators between them
    into a single filter.

    Returns `None` when no topic is given, the topic itself when exactly one is
    given, or a list of clauses ordered as in `OPERATOR_KEYS` otherwise.
    """
    if len(topics) > 4:
        raise ValueError(f'at most 4 topics are allowed, got {len(topics)}')

    operators = operators or {}
    for key in operators:
        if key not in OPERATOR_KEYS:
            raise ValueError(f'unknown topic operator - {key}')

    slots = list(topics) + [None] * (4 - len(topics))
    provided_topics = [t for t in slots if t is not None]
    provided_operators = [op for op in operators.values() if op]

    if len(provided_topics) == 1:
        if provided_operators:
            raise UnexpectedOperator(
                f'{error_message} topic operators must not be provided with a single topic'
            )
        return provided_topics[0]

    if not provided_topics and not provided_operators:
        return None

    if len(provided_topics) > 1 and not provided_operators:
        raise MissingOperators(
            f'{error_message} operators must be provided when specifying multiple topics'
        )

    # stray operators without any topic end up here as well
    # and fail on the first operator that lacks its topics
    clauses = []
    for key, (left_idx, right_idx) in OPERATOR_KEYS.items():
        operator = operators.get(key)
        if not operator:
            continue
        left, right = slots[left_idx], slots[right_idx]
        if left is None or right is None:
            raise MissingTopicForOperator(
                f'{error_message} missing topic for operator {key}',
                operator_key=key
            )
        clauses.append(TopicClause(
            topics=(left, right),
            operator=TopicOperator(operator.upper())
        ))
    return clauses
