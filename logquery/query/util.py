import re
from typing import NamedTuple, Union


class And(NamedTuple):
    ops: list['WhereExp']


class Or(NamedTuple):
    ops: list['WhereExp']


class Bin(NamedTuple):
    op: str
    lhs: str
    rhs: str


class Contains(NamedTuple):
    """Membership of `item` in the list valued column `col`"""
    col: str
    item: str


WhereExp = Union[And, Or, Bin, Contains]


def print_where(exp: WhereExp) -> str:
    if isinstance(exp, Bin):
        return f"{exp.lhs} {exp.op} {exp.rhs}"
    elif isinstance(exp, Contains):
        return f"list_contains({exp.col}, {exp.item})"
    elif isinstance(exp, And):
        return ' AND '.join(f"({e})" for e in (print_where(op) for op in exp.ops) if e)
    elif isinstance(exp, Or):
        return ' OR '.join(f"({e})" for e in (print_where(op) for op in exp.ops) if e)
    else:
        raise ValueError(f'unexpected where expression - {exp!r}')


def param(name: str) -> str:
    return f'${name}'


def to_snake_case(name: str) -> str:
    name = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', name).lower()
