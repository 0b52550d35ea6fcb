class InvalidParam(Exception):
    """Base class for request parameters rejected before any query is built"""
    pass


class InvalidTopicFormat(InvalidParam):
    pass


class InvalidAddress(InvalidParam):
    pass


class InvalidOperator(InvalidParam):
    pass


class MissingOperator(InvalidOperator):
    pass


class UnexpectedOperator(InvalidParam):
    pass


class MissingOperators(InvalidParam):
    pass


class MissingTopicForOperator(InvalidParam):
    def __init__(self, message: str, operator_key: str):
        super().__init__(message)
        self.operator_key = operator_key


class QueryExecutionError(Exception):
    pass
