"""SQLite statement builder."""

import re
from typing import Optional

from sqlscript.core.statement import Delimiter
from sqlscript.dialects.base import SQLStatementBuilder

__all__ = ("SQLiteStatementBuilder",)

TRIGGER_START_PATTERN = re.compile(r"^CREATE\s+(?:TEMP\s+|TEMPORARY\s+)?TRIGGER\b")


class SQLiteStatementBuilder(SQLStatementBuilder):
    """SQLite rules: a trigger body runs until its ``BEGIN`` is closed by ``END;``.

    ``CASE ... END`` expressions inside the body are nested blocks, so their
    ``END`` does not close the trigger. Outside triggers ``BEGIN`` and ``END``
    are transaction statements and are not tracked.
    """

    __slots__ = ()

    quote_pairs = {"'": "'", '"': '"', "`": "`", "[": "]"}
    block_starters = frozenset({"BEGIN", "CASE"})
    block_enders = frozenset({"END"})

    def _delimiter_for_statement_start(self, statement_start: str) -> Optional[Delimiter]:
        if TRIGGER_START_PATTERN.match(statement_start):
            self._tracks_blocks = True
        return None
