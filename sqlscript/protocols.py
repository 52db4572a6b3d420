"""Runtime-checkable protocols for the collaborators of the script splitter.

The splitter only ever holds these interfaces, so dialect knowledge stays in the
builders and substitution rules stay in the replacers.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, runtime_checkable

from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from sqlscript.core.statement import Delimiter, SQLStatement

__all__ = (
    "BuilderFactory",
    "PlaceholderReplacerProtocol",
    "StatementBuilderProtocol",
    "StatementExecutorProtocol",
)


@runtime_checkable
class PlaceholderReplacerProtocol(Protocol):
    """Protocol for line-level placeholder substitution."""

    def replace_placeholders(self, line: str) -> str:
        """Return the line with all placeholders replaced."""
        ...


@runtime_checkable
class StatementBuilderProtocol(Protocol):
    """Protocol for the per-statement, dialect-specific accumulator."""

    @property
    def is_empty(self) -> bool:
        """True while no line has been added."""
        ...

    @property
    def is_terminated(self) -> bool:
        """True once the added lines form a complete statement."""
        ...

    @property
    def delimiter(self) -> "Delimiter":
        """Delimiter the builder currently terminates on."""
        ...

    def is_comment_directive(self, line: str) -> bool:
        """Whether this trimmed, comment-like line carries meaning and must be kept."""
        ...

    def is_single_line_comment(self, line: str) -> bool:
        """Whether this trimmed line is entirely a single-line comment."""
        ...

    def starts_multiline_comment(self, line: str) -> bool:
        """Whether this trimmed line opens a multi-line comment."""
        ...

    def ends_multiline_comment(self, line: str) -> bool:
        """Whether this trimmed line closes a multi-line comment."""
        ...

    def extract_new_delimiter(self, line: str) -> "Optional[Delimiter]":
        """Return the new delimiter if the line is a delimiter change directive."""
        ...

    def set_line_number(self, line_number: int) -> None: ...

    def set_delimiter(self, delimiter: "Delimiter") -> None: ...

    def add_line(self, line: str) -> None: ...

    def get_statement(self) -> "SQLStatement": ...


@runtime_checkable
class StatementExecutorProtocol(Protocol):
    """Protocol for anything able to run a single SQL statement."""

    def execute(self, sql: str) -> Any: ...


BuilderFactory: TypeAlias = Callable[[], StatementBuilderProtocol]
"""Zero-argument callable returning a fresh statement builder."""
