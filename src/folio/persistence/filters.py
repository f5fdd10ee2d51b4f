"""Document filters understood by every store backend.

A filter is evaluated two ways: ``matches()`` against a plain document dict
(in-memory backend) and ``to_clause()`` against a JSONB document column
(PostgreSQL backend). ``None`` as a filter means "all documents".
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, and_, case, exists, func, literal, or_, select
from sqlalchemy.dialects.postgresql import JSONB


class Filter(ABC):
    """Abstract document filter."""

    @abstractmethod
    def matches(self, doc: dict[str, Any]) -> bool:
        """Evaluate the filter against a document."""

    @abstractmethod
    def to_clause(self, column: Any) -> ColumnElement[bool]:
        """Translate the filter into a SQL predicate over a JSONB column."""


@dataclass(frozen=True)
class Eq(Filter):
    """Exact match on a top-level field."""

    field: str
    value: Any

    def matches(self, doc: dict[str, Any]) -> bool:
        return doc.get(self.field) == self.value

    def to_clause(self, column: Any) -> ColumnElement[bool]:
        return column.contains({self.field: self.value})


@dataclass(frozen=True)
class IRegex(Filter):
    """Case-insensitive regular expression match.

    For array fields the filter matches when any element matches.
    """

    field: str
    pattern: str

    def matches(self, doc: dict[str, Any]) -> bool:
        value = doc.get(self.field)
        candidates = value if isinstance(value, list) else [value]
        compiled = re.compile(self.pattern, re.IGNORECASE)
        return any(isinstance(item, str) and compiled.search(item) for item in candidates)

    def to_clause(self, column: Any) -> ColumnElement[bool]:
        element = column[self.field]
        kind = func.jsonb_typeof(element)
        scalar = case((kind == "string", element.astext), else_=None).op("~*")(self.pattern)

        # jsonb_array_elements_text raises on scalars, so feed it [] instead
        as_array = case((kind == "array", element), else_=literal([], JSONB))
        items = func.jsonb_array_elements_text(as_array).table_valued("value")
        in_array = exists(
            select(literal(1)).select_from(items).where(items.c.value.op("~*")(self.pattern))
        )
        return or_(scalar, in_array)


@dataclass(frozen=True)
class Range(Filter):
    """Numeric range on a top-level field.

    ``gte``/``lte`` are inclusive bounds; ``gt`` is an additional strict
    lower bound.
    """

    field: str
    gte: float | None = None
    lte: float | None = None
    gt: float | None = None

    def matches(self, doc: dict[str, Any]) -> bool:
        value = doc.get(self.field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if self.gte is not None and value < self.gte:
            return False
        if self.lte is not None and value > self.lte:
            return False
        if self.gt is not None and value <= self.gt:
            return False
        return True

    def to_clause(self, column: Any) -> ColumnElement[bool]:
        element = column[self.field]
        number = case((func.jsonb_typeof(element) == "number", element.as_float()), else_=None)
        clauses = [number.is_not(None)]
        if self.gte is not None:
            clauses.append(number >= self.gte)
        if self.lte is not None:
            clauses.append(number <= self.lte)
        if self.gt is not None:
            clauses.append(number > self.gt)
        return and_(*clauses)


@dataclass(frozen=True)
class AnyOf(Filter):
    """Logical OR of filters."""

    filters: tuple[Filter, ...]

    def matches(self, doc: dict[str, Any]) -> bool:
        return any(f.matches(doc) for f in self.filters)

    def to_clause(self, column: Any) -> ColumnElement[bool]:
        return or_(*(f.to_clause(column) for f in self.filters))
