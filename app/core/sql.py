"""
Helpers for building parameterized SQL fragments.

Two builders live here:
- sql_for_partial_update: the SET part of an UPDATE from a dict of changed fields
- sql_for_query_filter / sql_where_clause: comparison clauses from search filters

Each clause is kept together with the value it binds (BoundClause) and only
flattened into clause text + positional values when rendered, so placeholder
numbers and value positions cannot drift apart.
"""

import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from app.core.exceptions import InvalidInputError


class FilterKind(str, enum.Enum):
    """
    The comparisons a search filter may request.

    - CONTAINS: case-insensitive substring match (ILIKE)
    - AT_LEAST: column >= value
    - AT_MOST: column <= value
    """
    CONTAINS = "CONTAINS"
    AT_LEAST = "AT_LEAST"
    AT_MOST = "AT_MOST"


# Filter key -> kind. Keys outside the vocabulary are rejected.
COMPANY_FILTERS: Dict[str, FilterKind] = {
    "nameLike": FilterKind.CONTAINS,
    "minEmployees": FilterKind.AT_LEAST,
    "maxEmployees": FilterKind.AT_MOST,
}

JOB_FILTERS: Dict[str, FilterKind] = {
    "title": FilterKind.CONTAINS,
    "minSalary": FilterKind.AT_LEAST,
    "maxSalary": FilterKind.AT_MOST,
}

# Operators some dialects spell differently. SQLite's LIKE is already
# case-insensitive for ASCII and has no ILIKE.
_DIALECT_OPERATORS: Dict[str, Dict[str, str]] = {
    "sqlite": {"ILIKE": "LIKE"},
}


@dataclass(frozen=True)
class BoundClause:
    """A single `column <op> placeholder` clause and the value it binds."""
    column: str
    operator: str
    value: Any
    quoted: bool = False
    escape: Optional[str] = None

    def render(self, placeholder: str, operators: Optional[Mapping[str, str]] = None) -> str:
        operator = (operators or {}).get(self.operator, self.operator)
        column = f'"{self.column}"' if self.quoted else self.column
        if operator == "=":
            # SET clauses are written without spaces: "first_name"=$1
            return f"{column}={placeholder}"
        if self.escape:
            return f"{column} {operator} {placeholder} ESCAPE '{self.escape}'"
        return f"{column} {operator} {placeholder}"


@dataclass(frozen=True)
class SqlFragment:
    """
    A partial SQL clause plus its bound values.

    Attributes:
        clauses: Clause/value records in emission order
        separator: Text placed between rendered clauses (", " or " AND ")
        prefix: Keyword placed before the clauses ("WHERE " for the companion variant)
        start: Placeholder number of the first clause (1-based)
    """
    clauses: Tuple[BoundClause, ...] = ()
    separator: str = ", "
    prefix: str = ""
    start: int = 1

    def _render(self, placeholder: Callable[[int], str], operators: Optional[Mapping[str, str]] = None) -> str:
        if not self.clauses:
            return ""
        parts = [
            clause.render(placeholder(position), operators)
            for position, clause in enumerate(self.clauses, start=self.start)
        ]
        return self.prefix + self.separator.join(parts)

    @property
    def sql(self) -> str:
        """Clause text using positional placeholders ($1, $2, ...)."""
        return self._render(lambda position: f"${position}")

    @property
    def values(self) -> List[Any]:
        """Bound values; values[i] belongs to placeholder i + start."""
        return [clause.value for clause in self.clauses]

    def bind(self, dialect_name: Optional[str] = None, prefix: str = "p") -> Tuple[str, Dict[str, Any]]:
        """
        Render the fragment with SQLAlchemy named parameters.

        Args:
            dialect_name: Name of the target dialect (e.g. "postgresql", "sqlite")
            prefix: Parameter name prefix, so "p" gives :p1, :p2, ...

        Returns:
            Tuple of (clause text, parameter dict) ready for sqlalchemy.text()
        """
        operators = _DIALECT_OPERATORS.get(dialect_name or "", {})
        text = self._render(lambda position: f":{prefix}{position}", operators)
        params = {
            f"{prefix}{position}": clause.value
            for position, clause in enumerate(self.clauses, start=self.start)
        }
        return text, params

    def __bool__(self) -> bool:
        return bool(self.clauses)


def _column_for(key: str, js_to_sql: Mapping[str, str]) -> str:
    return js_to_sql.get(key) or key


LIKE_ESCAPE = "\\"


def escape_like(value: Any) -> str:
    """Escape LIKE metacharacters so `value` only matches itself."""
    text = str(value)
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return text


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str], start: int = 1) -> SqlFragment:
    """
    Build the SET part of an UPDATE statement.

    Only the fields present in `data` are changed. Field names found in
    `js_to_sql` are translated to their column names; others are used as-is.

        {"firstName": "Aliya", "age": 32} + {"firstName": "first_name"}
        => '"first_name"=$1, "age"=$2' with values ["Aliya", 32]

    Raises:
        InvalidInputError: If `data` is empty
    """
    if not data:
        raise InvalidInputError("No data")

    clauses = tuple(
        BoundClause(column=_column_for(key, js_to_sql), operator="=", value=value, quoted=True)
        for key, value in data.items()
    )
    return SqlFragment(clauses=clauses, separator=", ", start=start)


def _filter_clause(key: str, value: Any, js_to_sql: Mapping[str, str], vocabulary: Mapping[str, FilterKind]) -> BoundClause:
    kind = vocabulary.get(key)
    if kind is None:
        raise InvalidInputError(f"Unknown filter: {key}")

    column = _column_for(key, js_to_sql)
    if kind is FilterKind.CONTAINS:
        return BoundClause(column=column, operator="ILIKE", value=f"%{escape_like(value)}%", escape=LIKE_ESCAPE)
    if kind is FilterKind.AT_LEAST:
        return BoundClause(column=column, operator=">=", value=value)
    return BoundClause(column=column, operator="<=", value=value)


def sql_for_query_filter(
    filters: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    vocabulary: Mapping[str, FilterKind] = COMPANY_FILTERS,
    start: int = 1,
) -> SqlFragment:
    """
    Build comparison clauses for a search, joined with AND.

    CONTAINS values are escaped and wrapped in % wildcards here, so callers
    must pass the raw search text: a pre-wrapped "%c%" is searched for
    literally, percent signs included. The min <= max relationship is not
    checked, see ensure_ordered_range.

        {"nameLike": "net", "maxEmployees": 3} + {"nameLike": "name", "maxEmployees": "num_employees"}
        => name ILIKE $1 ESCAPE '\\' AND num_employees <= $2
           with values ["%net%", 3]

    Raises:
        InvalidInputError: If `filters` is empty or holds a key outside `vocabulary`
    """
    if not filters:
        raise InvalidInputError("No data")

    clauses = tuple(
        _filter_clause(key, value, js_to_sql, vocabulary)
        for key, value in filters.items()
    )
    return SqlFragment(clauses=clauses, separator=" AND ", start=start)


def sql_where_clause(
    filters: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    vocabulary: Mapping[str, FilterKind] = COMPANY_FILTERS,
    start: int = 1,
) -> SqlFragment:
    """
    Same as sql_for_query_filter, but the rendered text starts with WHERE.

    An empty `filters` mapping is allowed and gives an empty fragment, so the
    result can be dropped straight into a SELECT.
    """
    if not filters:
        return SqlFragment(separator=" AND ", prefix="WHERE ", start=start)

    fragment = sql_for_query_filter(filters, js_to_sql, vocabulary, start)
    return SqlFragment(clauses=fragment.clauses, separator=fragment.separator, prefix="WHERE ", start=start)


def ensure_ordered_range(filters: Mapping[str, Any], low_key: str, high_key: str) -> None:
    """
    Check that filters[low_key] <= filters[high_key] when both are given.

    Raises:
        InvalidInputError: If the minimum is greater than the maximum
    """
    low = filters.get(low_key)
    high = filters.get(high_key)
    if low is not None and high is not None and low > high:
        raise InvalidInputError(f"{low_key} cannot be greater than {high_key}")
