"""Value types produced while splitting a script.

Both types are immutable once built and use ``__slots__`` instead of dataclasses
to stay compatible with MyPyC compilation.
"""

from typing import Any

from mypy_extensions import mypyc_attr

__all__ = ("DEFAULT_DELIMITER", "Delimiter", "SQLStatement")


@mypyc_attr(allow_interpreted_subclasses=False)
class Delimiter:
    """Marker that terminates a statement.

    ``alone_on_line`` delimiters (``GO``, ``/``) only terminate a statement when they
    make up the whole trimmed line.
    """

    __slots__ = ("_alone_on_line", "_delimiter")

    def __init__(self, delimiter: str, alone_on_line: bool = False) -> None:
        object.__setattr__(self, "_delimiter", delimiter)
        object.__setattr__(self, "_alone_on_line", alone_on_line)

    @property
    def delimiter(self) -> str:
        return self._delimiter  # type: ignore[no-any-return]

    @property
    def alone_on_line(self) -> bool:
        return self._alone_on_line  # type: ignore[no-any-return]

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Delimiter):
            return NotImplemented
        return self._delimiter == other._delimiter and self._alone_on_line == other._alone_on_line

    def __hash__(self) -> int:
        return hash((self._delimiter, self._alone_on_line))

    def __repr__(self) -> str:
        return f"Delimiter({self._delimiter!r}, alone_on_line={self._alone_on_line})"


DEFAULT_DELIMITER = Delimiter(";")


@mypyc_attr(allow_interpreted_subclasses=False)
class SQLStatement:
    """One parsed, placeholder-resolved statement and the line it started on."""

    __slots__ = ("_line_number", "_sql")

    def __init__(self, line_number: int, sql: str) -> None:
        object.__setattr__(self, "_line_number", line_number)
        object.__setattr__(self, "_sql", sql)

    @property
    def line_number(self) -> int:
        """1-based line of the script on which the statement begins."""
        return self._line_number  # type: ignore[no-any-return]

    @property
    def sql(self) -> str:
        return self._sql  # type: ignore[no-any-return]

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SQLStatement):
            return NotImplemented
        return self._line_number == other._line_number and self._sql == other._sql

    def __hash__(self) -> int:
        return hash((self._line_number, self._sql))

    def __repr__(self) -> str:
        return f"SQLStatement(line_number={self._line_number}, sql={self._sql!r})"
