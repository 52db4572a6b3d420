"""SQL Server statement builder."""

from sqlscript.core.statement import Delimiter
from sqlscript.dialects.base import SQLStatementBuilder

__all__ = ("TSQLStatementBuilder",)

BATCH_DELIMITER = Delimiter("GO", alone_on_line=True)


class TSQLStatementBuilder(SQLStatementBuilder):
    """SQL Server rules: batches end with ``GO`` on its own line.

    Semicolons stay inside the batch, so a whole batch is one statement.
    """

    __slots__ = ()

    quote_pairs = {"'": "'", '"': '"', "[": "]"}

    def default_delimiter(self) -> Delimiter:
        return BATCH_DELIMITER
