"""Line-driven script splitter.

Turns the lines of a migration script into statements. The splitter owns the
state that spans statements (being inside a multi-line comment between
statements, the delimiter set by the last delimiter directive) and hands every
dialect question to a statement builder created from the configured factory.

A builder is created for each statement and dropped once it reports termination,
so nothing from a finished statement can leak into the next one.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from mypy_extensions import mypyc_attr

from sqlscript.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlscript.core.statement import Delimiter, SQLStatement
    from sqlscript.protocols import BuilderFactory, StatementBuilderProtocol

__all__ = ("ScanState", "ScriptSplitter")

logger = get_logger("core.splitter")


@dataclass
class ScanState:
    """State carried from one line to the next during a single split."""

    in_multiline_comment: bool = False
    """Whether the scan is inside a multi-line comment between statements."""
    delimiter: "Optional[Delimiter]" = None
    """Non-standard delimiter set by a delimiter directive, applied to every following statement."""


@mypyc_attr(allow_interpreted_subclasses=False)
class ScriptSplitter:
    """Splits script lines into statements using a dialect builder factory."""

    __slots__ = ("_builder_factory",)

    def __init__(self, builder_factory: "BuilderFactory") -> None:
        """Initialize the splitter.

        Args:
            builder_factory: Zero-argument callable returning a fresh statement builder.
        """
        self._builder_factory = builder_factory

    def split(self, lines: "Iterable[str]") -> "list[SQLStatement]":
        """Turn these lines into a series of statements.

        Args:
            lines: The script lines, placeholders already replaced.

        Returns:
            The statements contained in these lines, in source order.
        """
        statements: list[SQLStatement] = []
        state = ScanState()
        builder = self._builder_factory()

        for line_number, line in enumerate(lines, start=1):
            if builder.is_empty and not self.process_line(state, builder, line, line_number):
                continue

            builder.add_line(line)

            if builder.is_terminated:
                statement = builder.get_statement()
                statements.append(statement)
                _log_statement(statement, terminated=True)
                builder = self._builder_factory()

        # Statement not followed by a delimiter
        if not builder.is_empty:
            statement = builder.get_statement()
            statements.append(statement)
            _log_statement(statement, terminated=False)

        return statements

    @staticmethod
    def process_line(state: ScanState, builder: "StatementBuilderProtocol", line: str, line_number: int) -> bool:
        """Decide what a line seen between statements does.

        Blank lines, comments, delimiter directives and stray alone-on-line
        delimiters are consumed here and update ``state``. Any other line starts a
        new statement on ``builder``.

        Args:
            state: Scan state of the current split, updated in place.
            builder: Empty builder for the next statement.
            line: The line to inspect.
            line_number: 1-based number of the line.

        Returns:
            True if the line starts a statement and must be added to the builder.
        """
        trimmed_line = line.strip()
        if not trimmed_line:
            return False

        if not builder.is_comment_directive(trimmed_line):
            if builder.starts_multiline_comment(trimmed_line):
                state.in_multiline_comment = True

            if state.in_multiline_comment:
                if builder.ends_multiline_comment(trimmed_line):
                    state.in_multiline_comment = False
                return False

            if builder.is_single_line_comment(trimmed_line):
                return False

        new_delimiter = builder.extract_new_delimiter(line)
        if new_delimiter is not None:
            state.delimiter = new_delimiter
            return False

        # A repeated batch separator would otherwise become an empty statement
        delimiter = state.delimiter or builder.delimiter
        if delimiter.alone_on_line and trimmed_line.upper() == delimiter.delimiter.upper():
            return False

        builder.set_line_number(line_number)
        if state.delimiter is not None:
            builder.set_delimiter(state.delimiter)
        return True


def _log_statement(statement: "SQLStatement", *, terminated: bool) -> None:
    log_with_context(
        logger,
        logging.DEBUG,
        "splitter.statement.found",
        line_number=statement.line_number,
        sql=statement.sql,
        terminated=terminated,
    )

