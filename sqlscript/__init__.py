"""sqlscript: split database migration scripts into executable statements."""

from sqlscript import dialects, exceptions
from sqlscript.config import ScriptConfig
from sqlscript.core import (
    DEFAULT_DELIMITER,
    Delimiter,
    NoPlaceholderReplacer,
    PlaceholderReplacer,
    ScanState,
    ScriptSplitter,
    SQLStatement,
    read_lines,
)
from sqlscript.dialects import get_builder_factory
from sqlscript.script import SQLScript

__all__ = (
    "DEFAULT_DELIMITER",
    "Delimiter",
    "NoPlaceholderReplacer",
    "PlaceholderReplacer",
    "SQLScript",
    "SQLStatement",
    "ScanState",
    "ScriptConfig",
    "ScriptSplitter",
    "dialects",
    "exceptions",
    "get_builder_factory",
    "read_lines",
)
