"""Core splitting pipeline: line reading, placeholder substitution and statement splitting."""

from sqlscript.core.placeholders import NoPlaceholderReplacer, PlaceholderReplacer
from sqlscript.core.reader import read_lines
from sqlscript.core.splitter import ScanState, ScriptSplitter
from sqlscript.core.statement import DEFAULT_DELIMITER, Delimiter, SQLStatement

__all__ = (
    "DEFAULT_DELIMITER",
    "Delimiter",
    "NoPlaceholderReplacer",
    "PlaceholderReplacer",
    "SQLStatement",
    "ScanState",
    "ScriptSplitter",
    "read_lines",
)
