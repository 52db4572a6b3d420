"""Configuration for parsing migration scripts."""

from dataclasses import dataclass, field
from typing import Optional

from sqlscript.core.placeholders import (
    DEFAULT_PLACEHOLDER_PREFIX,
    DEFAULT_PLACEHOLDER_SUFFIX,
    NoPlaceholderReplacer,
    PlaceholderReplacer,
)
from sqlscript.dialects import get_builder_factory, normalize_dialect
from sqlscript.exceptions import ImproperConfigurationError
from sqlscript.protocols import BuilderFactory, PlaceholderReplacerProtocol

__all__ = ("ScriptConfig",)


@dataclass
class ScriptConfig:
    """Settings used to turn script text into statements.

    Example:
        ```python
        config = ScriptConfig(dialect="mysql", placeholders={"schema": "app"})
        script = SQLScript.from_config(source, config)
        ```
    """

    dialect: "Optional[str]" = None
    """Database dialect (e.g., 'postgres', 'mysql', 'oracle'). None uses generic SQL rules."""
    placeholders: "dict[str, Optional[str]]" = field(default_factory=dict)
    """Placeholder names mapped to the values substituted into the script."""
    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX
    """Text opening a placeholder expression."""
    placeholder_suffix: str = DEFAULT_PLACEHOLDER_SUFFIX
    """Text closing a placeholder expression."""
    placeholder_replacement: bool = True
    """Whether placeholders are replaced at all."""
    strip_delimiter: bool = False
    """Remove the terminating delimiter from each statement."""
    encoding: str = "utf-8"
    """Text encoding used when reading script files."""

    def __post_init__(self) -> None:
        if not self.placeholder_prefix or not self.placeholder_suffix:
            msg = "Placeholder prefix and suffix must not be empty"
            raise ImproperConfigurationError(msg)
        self.dialect = normalize_dialect(self.dialect)

    def create_placeholder_replacer(self) -> PlaceholderReplacerProtocol:
        if not self.placeholder_replacement:
            return NoPlaceholderReplacer()
        return PlaceholderReplacer(self.placeholders, self.placeholder_prefix, self.placeholder_suffix)

    def create_builder_factory(self) -> BuilderFactory:
        return get_builder_factory(self.dialect, strip_delimiter=self.strip_delimiter)
