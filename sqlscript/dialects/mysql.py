"""MySQL and MariaDB statement builder."""

import re
from typing import Optional

from sqlscript.core.statement import Delimiter
from sqlscript.dialects.base import SQLStatementBuilder

__all__ = ("MySQLStatementBuilder",)

# Matches: DELIMITER $$
DELIMITER_DIRECTIVE_PATTERN = re.compile(r"^\s*DELIMITER\s+(?P<delimiter>\S+)\s*$", re.IGNORECASE)

# Matches: /*!50003 ... versioned comments that MySQL executes
VERSIONED_COMMENT_PATTERN = re.compile(r"^/\*!\d{5}")


class MySQLStatementBuilder(SQLStatementBuilder):
    """MySQL rules: ``#`` comments, ``DELIMITER`` directives and versioned comments.

    Strings may be quoted with ``'`` or ``"`` and escape quotes with a backslash;
    identifiers are quoted with backticks.
    """

    __slots__ = ()

    line_comment_markers = ("--", "#")
    quote_pairs = {"'": "'", '"': '"', "`": "`"}

    def is_comment_directive(self, line: str) -> bool:
        return VERSIONED_COMMENT_PATTERN.match(line) is not None

    def extract_new_delimiter(self, line: str) -> Optional[Delimiter]:
        match = DELIMITER_DIRECTIVE_PATTERN.match(line)
        if match is None:
            return None
        return Delimiter(match.group("delimiter"))

    def _find_closing_quote(self, line: str, pos: int, closing: str) -> int:
        if closing == "`":
            return line.find(closing, pos)
        index = pos
        length = len(line)
        while index < length:
            char = line[index]
            if char == "\\":
                index += 2
                continue
            if char == closing:
                return index
            index += 1
        return -1
