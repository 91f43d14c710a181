"""Translate sparse filter values into parameterized query fragments.

A filter is a dataclass whose predicate fields default to ``UNSET``. Only the
fields that were set become ``column = :arg_N`` clauses, numbered in
declaration order and joined with AND. Values never reach the SQL text; they
travel as bound parameters.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from sqlalchemy import and_, bindparam
from sqlalchemy.sql.elements import ColumnElement


class _Unset:
    """Marker for an optional field that was not supplied."""

    _instance: ClassVar["_Unset | None"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """Check whether an optional field holds a value."""
    return value is not UNSET


def present_fields(value: Any, exclude: tuple[str, ...] = ()) -> list[tuple[str, Any]]:
    """Return (name, value) for every set field of a dataclass, in declaration order."""
    return [
        (f.name, getattr(value, f.name))
        for f in fields(value)
        if f.name not in exclude and is_set(getattr(value, f.name))
    ]


@dataclass(frozen=True)
class Filter:
    """Base for filters: predicate fields plus pagination bounds."""

    limit: int = field(default=0, kw_only=True)
    offset: int = field(default=0, kw_only=True)

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError("limit must not be negative")
        if self.offset < 0:
            raise ValueError("offset must not be negative")

    def predicates(self) -> list[tuple[str, Any]]:
        """Set predicates as (field, value) pairs, in declaration order."""
        return present_fields(self, exclude=("limit", "offset"))


@dataclass(frozen=True)
class CollectionFilter(Filter):
    id: Any = UNSET
    name: Any = UNSET
    author_id: Any = UNSET


@dataclass(frozen=True)
class UserFilter(Filter):
    id: Any = UNSET
    email: Any = UNSET


@dataclass(frozen=True)
class QueryFragment:
    """WHERE clauses, their ordered arguments and pagination bounds."""

    clauses: list[ColumnElement] = field(default_factory=list)
    args: list[Any] = field(default_factory=list)
    placeholders: list[str] = field(default_factory=list)
    limit: int = 0
    offset: int = 0

    @property
    def where(self) -> ColumnElement | None:
        """All clauses joined with AND, or None when unconstrained."""
        if not self.clauses:
            return None
        return and_(*self.clauses)

    def apply(self, query, order_by: ColumnElement):
        """Apply the fragment to an ORM query, ordering by identity ascending.

        A limit or offset of zero means unbounded / no skip.
        """
        if self.where is not None:
            query = query.filter(self.where)
        query = query.order_by(order_by.asc())
        if self.limit:
            query = query.limit(self.limit)
        if self.offset:
            query = query.offset(self.offset)
        return query


def translate_filter(filter_: Filter, columns: dict[str, ColumnElement]) -> QueryFragment:
    """Build a QueryFragment from the set predicates of a filter.

    ``columns`` maps every predicate field name to the column it constrains.
    """
    clauses, args, placeholders = [], [], []

    for position, (name, value) in enumerate(filter_.predicates(), start=1):
        try:
            column = columns[name]
        except KeyError:
            raise ValueError(f"No column mapped for filter field '{name}'") from None
        placeholder = f"arg_{position}"
        clauses.append(column == bindparam(placeholder, value))
        args.append(value)
        placeholders.append(placeholder)

    return QueryFragment(
        clauses=clauses,
        args=args,
        placeholders=placeholders,
        limit=filter_.limit,
        offset=filter_.offset,
    )
