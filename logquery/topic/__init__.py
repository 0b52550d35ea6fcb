from .codec import parse_topic, canonicalize, to_binary, from_binary, parse_address
from .operator import TopicOperator, parse_operator
from .params import TopicClause, TopicFilter, normalize_topic_params, OPERATOR_KEYS
