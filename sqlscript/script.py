"""SQL script made of statements separated by delimiters.

Single-line and multi-line comments between statements are stripped, and
placeholders are replaced before statements are assembled.
"""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO, Union

from sqlscript.config import ScriptConfig
from sqlscript.core.placeholders import NoPlaceholderReplacer
from sqlscript.core.reader import read_lines
from sqlscript.core.splitter import ScriptSplitter
from sqlscript.dialects import get_builder_factory
from sqlscript.exceptions import StreamReadError
from sqlscript.utils.logging import get_logger, log_with_context, script_context

if TYPE_CHECKING:
    from sqlscript.core.statement import SQLStatement
    from sqlscript.protocols import BuilderFactory, PlaceholderReplacerProtocol, StatementExecutorProtocol

__all__ = ("SQLScript",)

logger = get_logger("script")


class SQLScript:
    """Parsed migration script.

    The source is parsed once, when the script is created. Statements are kept in
    source order and never change afterwards.

    Example:
        ```python
        script = SQLScript("CREATE TABLE t (id INT);\\nINSERT INTO t VALUES (1);")
        for statement in script:
            print(statement.line_number, statement.sql)
        ```
    """

    __slots__ = ("_builder_factory", "_statements")

    def __init__(
        self,
        source: "Union[str, TextIO]",
        placeholder_replacer: "Optional[PlaceholderReplacerProtocol]" = None,
        builder_factory: "Optional[BuilderFactory]" = None,
    ) -> None:
        """Create a script from this source.

        Args:
            source: The script text (or a text stream), placeholders still present.
            placeholder_replacer: Replacer applied to every line. Defaults to no replacement.
            builder_factory: Factory for dialect statement builders. Defaults to generic SQL.
        """
        self._builder_factory = builder_factory or get_builder_factory()
        self._statements = tuple(self.parse(source, placeholder_replacer or NoPlaceholderReplacer()))

    @classmethod
    def from_statements(
        cls, statements: "Sequence[SQLStatement]", builder_factory: "Optional[BuilderFactory]" = None
    ) -> "SQLScript":
        """Create a script from statements that are already parsed.

        Args:
            statements: The statements of the script.
            builder_factory: Factory for dialect statement builders.

        Returns:
            The script.
        """
        script = cls.__new__(cls)
        script._builder_factory = builder_factory or get_builder_factory()
        script._statements = tuple(statements)
        return script

    @classmethod
    def from_config(cls, source: "Union[str, TextIO]", config: ScriptConfig) -> "SQLScript":
        """Create a script, taking placeholder and dialect settings from a config.

        Args:
            source: The script text or a text stream.
            config: Script settings.

        Returns:
            The parsed script.
        """
        with script_context(dialect=config.dialect):
            return cls(source, config.create_placeholder_replacer(), config.create_builder_factory())

    @classmethod
    def from_file(cls, path: "Union[str, Path]", config: "Optional[ScriptConfig]" = None) -> "SQLScript":
        """Read and parse a script file.

        Args:
            path: Path of the script file.
            config: Script settings. Defaults to generic SQL without placeholders.

        Raises:
            StreamReadError: If the file cannot be read.

        Returns:
            The parsed script.
        """
        config = config or ScriptConfig()
        path = Path(path)
        with script_context(script=str(path)):
            try:
                with path.open(encoding=config.encoding) as stream:
                    return cls.from_config(stream, config)
            except OSError as e:
                msg = f"Cannot read script file {path}"
                raise StreamReadError(msg) from e

    @property
    def statements(self) -> "tuple[SQLStatement, ...]":
        return self._statements

    def parse(
        self, source: "Union[str, TextIO]", placeholder_replacer: "PlaceholderReplacerProtocol"
    ) -> "list[SQLStatement]":
        """Parse a script source into statements.

        Placeholders are replaced on every line, including lines later dropped as
        comments or delimiter directives.

        Args:
            source: The script text or a text stream.
            placeholder_replacer: The placeholder replacer to use.

        Returns:
            The parsed statements.
        """
        lines = [placeholder_replacer.replace_placeholders(line) for line in read_lines(source)]
        statements = ScriptSplitter(self._builder_factory).split(lines)
        log_with_context(logger, logging.DEBUG, "script.parsed", lines=len(lines), statements=len(statements))
        return statements

    def execute(self, executor: "StatementExecutorProtocol") -> None:
        """Execute the statements one by one, in order.

        Args:
            executor: Anything with an ``execute(sql)`` method, such as a DB-API cursor.
        """
        for statement in self._statements:
            log_with_context(logger, logging.DEBUG, "script.statement.execute", line_number=statement.line_number)
            executor.execute(statement.sql)

    def __iter__(self) -> "Iterator[SQLStatement]":
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __repr__(self) -> str:
        return f"SQLScript(statements={len(self._statements)})"
