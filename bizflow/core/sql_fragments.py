"""SQL Fragment Builders - IN / NOT IN / OR / LIKE clauses for dynamic SQL.

Invariants:
    - All functions are PURE: string in, string out, no SQL parsing
    - Blank column or empty values yield "" (or [] for batch builders)
    - Every quoted value has single quotes doubled
    - LIKE clauses always escape with '#'

Design Decisions:
    - Fragments are plain strings meant to be embedded in larger statements;
      callers that can bind parameters should prefer sqlalchemy bindparams
"""

from typing import Sequence

from bizflow.core.domain_types import MatchingMode
from bizflow.core.string_format import is_null_or_blank

DEFAULT_BATCH_SIZE = 500
LIKE_ESCAPE = "#"


# ─── Escaping ────────────────────────────────────────────────────

def escape_quotes(value: str) -> str:
    return value.replace("'", "''")


def escape_like(src: str | None, escape_char: str = LIKE_ESCAPE) -> str | None:
    """Escape quotes, the escape char itself, % and _ for a LIKE pattern."""
    if is_null_or_blank(src):
        return src
    return (
        src.replace("'", "''")
        .replace(escape_char, escape_char + escape_char)
        .replace("%", escape_char + "%")
        .replace("_", escape_char + "_")
    )


def escape_special_chars(src: str | None) -> str | None:
    """Double quotes and backslash-escape '&'."""
    if is_null_or_blank(src):
        return src
    return src.replace("'", "''").replace("&", "\\&")


# ─── IN clauses ──────────────────────────────────────────────────

def to_in_sub_clause(values: Sequence[object]) -> str:
    """Quoted, comma-separated list without IN or brackets: 'a', 'b'."""
    return ", ".join(f"'{escape_quotes(str(v))}'" for v in values)


def to_in_clause(column: str, values: Sequence[object]) -> str:
    if is_null_or_blank(column) or not values:
        return ""
    return f"{column} IN ({to_in_sub_clause(values)})"


def to_not_in_clause(column: str, values: Sequence[object]) -> str:
    if is_null_or_blank(column) or not values:
        return ""
    return f"{column} NOT IN ({to_in_sub_clause(values)})"


def to_batch_in_clauses(
    column: str, values: Sequence[object], batch_size: int = DEFAULT_BATCH_SIZE,
) -> list[str]:
    """One IN clause per batch; batch_size < 1 falls back to the default."""
    if is_null_or_blank(column) or not values:
        return []
    return [
        f"{column} IN ({to_in_sub_clause(chunk)})"
        for chunk in _batches(values, batch_size)
    ]


# ─── OR clauses ──────────────────────────────────────────────────

def to_or_clause(column: str, numbers: Sequence[int | float]) -> str:
    """(col = 1 OR col = 2). Numbers are rendered unquoted."""
    if is_null_or_blank(column) or not numbers:
        return ""
    return "(" + " OR ".join(f"{column} = {n}" for n in numbers) + ")"


def to_or_like_clause(column: str, values: Sequence[object]) -> str:
    """(col LIKE '%a%' ESCAPE '#' OR ...)."""
    if is_null_or_blank(column) or not values:
        return ""
    return "(" + " OR ".join(
        to_like_clause(column, str(v)) for v in values
    ) + ")"


def to_batch_or_clauses(
    column: str, numbers: Sequence[int | float], batch_size: int = DEFAULT_BATCH_SIZE,
) -> list[str]:
    if is_null_or_blank(column) or not numbers:
        return []
    return [to_or_clause(column, chunk) for chunk in _batches(numbers, batch_size)]


# ─── LIKE clauses ────────────────────────────────────────────────

def to_like_clause(
    column: str, value: str | None, mode: MatchingMode | None = MatchingMode.ANY,
) -> str:
    """col LIKE '%v%' ESCAPE '#'; HEAD drops the leading %, TAIL the trailing one."""
    if is_null_or_blank(column) or is_null_or_blank(value):
        return ""
    mode = mode or MatchingMode.ANY
    prefix = "" if mode is MatchingMode.HEAD else "%"
    suffix = "" if mode is MatchingMode.TAIL else "%"
    return (
        f"{column} LIKE '{prefix}{escape_like(value, LIKE_ESCAPE)}{suffix}'"
        f" ESCAPE '{LIKE_ESCAPE}'"
    )


def _batches(values: Sequence, batch_size: int) -> list[Sequence]:
    if batch_size < 1:
        batch_size = DEFAULT_BATCH_SIZE
    return [values[i:i + batch_size] for i in range(0, len(values), batch_size)]
