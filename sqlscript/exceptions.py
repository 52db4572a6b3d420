"""Errors raised while reading, preparing and splitting scripts."""

from typing import Any

__all__ = (
    "ImproperConfigurationError",
    "PlaceholderError",
    "SQLScriptError",
    "StreamReadError",
)


class SQLScriptError(Exception):
    """Base class of every error raised while reading, preparing or splitting a script.

    The first message becomes ``detail``, the reason shown to the user. A subclass
    may declare a class-level ``detail`` used when it is raised without one.
    """

    detail: str = ""

    def __init__(self, *args: Any, detail: str = "") -> None:
        messages = [str(arg) for arg in args if arg]
        if not detail and messages:
            detail = messages.pop(0)
        self.detail = detail or self.detail
        super().__init__(*messages)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class StreamReadError(SQLScriptError):
    """The script source could not be fully consumed.

    Raised by the line reader when the underlying text stream fails. The error is
    fatal for the parse and is never retried here.
    """

    detail = "Cannot parse lines"


class PlaceholderError(SQLScriptError):
    """Placeholder expressions were left without a configured value."""

    expressions: "tuple[str, ...]"

    def __init__(self, expressions: "list[str]") -> None:
        self.expressions = tuple(expressions)
        super().__init__(
            f"No value provided for placeholder expressions: {', '.join(self.expressions)}. Check your configuration!"
        )


class ImproperConfigurationError(SQLScriptError):
    """A dialect name or placeholder setting cannot be used."""
