"""Dialect-specific statement builders and their lookup by dialect name."""

import logging
from difflib import get_close_matches
from functools import partial
from typing import Optional

from sqlglot.dialects.dialect import Dialect

from sqlscript.dialects.base import SQLStatementBuilder
from sqlscript.dialects.mysql import MySQLStatementBuilder
from sqlscript.dialects.oracle import OracleStatementBuilder
from sqlscript.dialects.postgres import PostgresStatementBuilder
from sqlscript.dialects.sqlite import SQLiteStatementBuilder
from sqlscript.dialects.tsql import TSQLStatementBuilder
from sqlscript.exceptions import ImproperConfigurationError
from sqlscript.protocols import BuilderFactory
from sqlscript.utils.logging import get_logger, log_with_context

__all__ = (
    "DIALECT_ALIASES",
    "STATEMENT_BUILDERS",
    "MySQLStatementBuilder",
    "OracleStatementBuilder",
    "PostgresStatementBuilder",
    "SQLStatementBuilder",
    "SQLiteStatementBuilder",
    "TSQLStatementBuilder",
    "get_builder_factory",
    "normalize_dialect",
)

logger = get_logger("dialects")

GENERIC_DIALECT = "generic"

# Aliases resolved to the names sqlglot knows dialects by
DIALECT_ALIASES = {
    "postgresql": "postgres",
    "pg": "postgres",
    "pgplsql": "postgres",
    "mariadb": "mysql",
    "plsql": "oracle",
    "oracledb": "oracle",
    "mssql": "tsql",
    "sqlserver": "tsql",
}

STATEMENT_BUILDERS: "dict[str, type[SQLStatementBuilder]]" = {
    GENERIC_DIALECT: SQLStatementBuilder,
    "mysql": MySQLStatementBuilder,
    "oracle": OracleStatementBuilder,
    "postgres": PostgresStatementBuilder,
    "sqlite": SQLiteStatementBuilder,
    "tsql": TSQLStatementBuilder,
}


def normalize_dialect(dialect: "Optional[str]") -> str:
    """Normalize a dialect name and check that sqlglot knows it.

    Args:
        dialect: Dialect name, alias, or None for generic SQL.

    Raises:
        ImproperConfigurationError: If the dialect is unknown.

    Returns:
        Normalized dialect name.
    """
    if not dialect:
        return GENERIC_DIALECT
    normalized = dialect.lower().strip()
    normalized = DIALECT_ALIASES.get(normalized, normalized)
    if normalized == GENERIC_DIALECT:
        return normalized
    try:
        Dialect.get_or_raise(normalized)
    except ValueError as e:
        candidates = {*STATEMENT_BUILDERS, *DIALECT_ALIASES, *Dialect.classes}
        suggestions = get_close_matches(normalized, sorted(candidates), n=3, cutoff=0.6)
        msg = f"Unknown dialect {dialect!r}"
        if suggestions:
            msg = f"{msg}. Did you mean: {', '.join(suggestions)}?"
        raise ImproperConfigurationError(msg) from e
    return normalized


def get_builder_factory(dialect: "Optional[str]" = None, *, strip_delimiter: bool = False) -> BuilderFactory:
    """Get a factory creating fresh statement builders for a dialect.

    Dialects without specific statement rules use the generic builder.

    Args:
        dialect: Dialect name or alias.
        strip_delimiter: Remove terminating delimiters from finished statements.

    Returns:
        Zero-argument callable returning a new, empty builder.
    """
    name = normalize_dialect(dialect)
    builder_class = STATEMENT_BUILDERS.get(name)
    if builder_class is None:
        log_with_context(
            logger, logging.DEBUG, "dialects.fallback", dialect=name, builder=SQLStatementBuilder.__name__
        )
        builder_class = SQLStatementBuilder
    return partial(builder_class, strip_delimiter=strip_delimiter)
