"""Oracle statement builder."""

import re
from typing import Optional

from sqlscript.core.statement import Delimiter
from sqlscript.dialects.base import SQLStatementBuilder

__all__ = ("OracleStatementBuilder",)

PLSQL_DELIMITER = Delimiter("/", alone_on_line=True)

# Anonymous blocks and stored program units end with a / on its own line
PLSQL_START_PATTERN = re.compile(
    r"^(?:DECLARE|BEGIN|CREATE\s+(?:OR\s+REPLACE\s+)?(?:(?:NON)?EDITIONABLE\s+)?"
    r"(?:FUNCTION|PROCEDURE|PACKAGE|TYPE|TRIGGER|LIBRARY|JAVA))\b"
)

# Matches: q'[  Q'{  nq'<  ...
Q_QUOTE_PATTERN = re.compile(r"[nN]?[qQ]'(?P<open>\S)")

Q_QUOTE_CLOSERS = {"[": "]", "{": "}", "(": ")", "<": ">"}


class OracleStatementBuilder(SQLStatementBuilder):
    """Oracle rules: PL/SQL blocks terminated by ``/`` and ``q'[...]'`` literals."""

    __slots__ = ()

    def _open_quote(self, line: str, pos: int) -> "Optional[tuple[str, str]]":
        if line[pos] in "nNqQ" and self._is_word_boundary(line, pos):
            match = Q_QUOTE_PATTERN.match(line, pos)
            if match is not None:
                opener = match.group("open")
                return match.group(0), Q_QUOTE_CLOSERS.get(opener, opener) + "'"
        return super()._open_quote(line, pos)

    def _delimiter_for_statement_start(self, statement_start: str) -> Optional[Delimiter]:
        if PLSQL_START_PATTERN.match(statement_start):
            return PLSQL_DELIMITER
        return None
