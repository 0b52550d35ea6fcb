import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .builder import SelectQueryBuilder


T = TypeVar('T')


@dataclass(frozen=True)
class PaginationMeta:
    totalItems: int
    itemCount: int
    itemsPerPage: int
    totalPages: int
    currentPage: int


@dataclass(frozen=True)
class Pagination(Generic[T]):
    items: list[T]
    meta: PaginationMeta
    links: dict[str, str] = field(default_factory=dict)


def _links(route: str, page: int, limit: int, total_pages: int) -> dict[str, str]:
    def link(p: int) -> str:
        return f'{route}?page={p}&limit={limit}'

    return {
        'first': link(1),
        'previous': link(page - 1) if page > 1 else '',
        'next': link(page + 1) if page < total_pages else '',
        'last': link(total_pages) if total_pages else ''
    }


def paginate(qb: SelectQueryBuilder, page: int = 1, limit: int = 10, route: str | None = None) -> Pagination[dict]:
    assert page >= 1 and limit >= 1

    total = qb.get_count()
    items = qb.offset((page - 1) * limit).limit(limit).get_many()
    total_pages = math.ceil(total / limit)

    return Pagination(
        items=items,
        meta=PaginationMeta(
            totalItems=total,
            itemCount=len(items),
            itemsPerPage=limit,
            totalPages=total_pages,
            currentPage=page
        ),
        links=_links(route, page, limit, total_pages) if route else {}
    )
