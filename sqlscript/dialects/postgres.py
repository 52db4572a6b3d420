"""PostgreSQL statement builder."""

import re
from typing import Optional

from sqlscript.core.statement import Delimiter
from sqlscript.dialects.base import SQLStatementBuilder

__all__ = ("PostgresStatementBuilder",)

# Matches: $$ or $tag$
DOLLAR_QUOTE_PATTERN = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")

COPY_FROM_STDIN_PATTERN = re.compile(r"^COPY\s.*\sFROM\s+STDIN\b")

COPY_DATA_DELIMITER = Delimiter("\\.", alone_on_line=True)


class PostgresStatementBuilder(SQLStatementBuilder):
    """PostgreSQL rules: dollar-quoted bodies and ``COPY ... FROM STDIN`` data blocks."""

    __slots__ = ("_copy_data",)

    def __init__(self, strip_delimiter: bool = False) -> None:
        super().__init__(strip_delimiter=strip_delimiter)
        self._copy_data = False

    def _open_quote(self, line: str, pos: int) -> "Optional[tuple[str, str]]":
        if line[pos] == "$" and self._is_word_boundary(line, pos):
            match = DOLLAR_QUOTE_PATTERN.match(line, pos)
            if match is not None:
                return match.group(0), match.group(0)
        return super()._open_quote(line, pos)

    def _scan(self, line: str) -> str:
        # Inline COPY data is raw text, quotes in it mean nothing.
        if self._copy_data:
            self._code_end = len(line.rstrip())
            return line
        return super()._scan(line)

    def _delimiter_for_statement_start(self, statement_start: str) -> Optional[Delimiter]:
        if COPY_FROM_STDIN_PATTERN.match(statement_start):
            self._copy_data = True
            return COPY_DATA_DELIMITER
        return None
