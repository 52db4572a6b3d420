"""Placeholder substitution applied to every script line before splitting."""

import re
from collections.abc import Mapping
from typing import Optional

from sqlscript.exceptions import ImproperConfigurationError, PlaceholderError

__all__ = ("DEFAULT_PLACEHOLDER_PREFIX", "DEFAULT_PLACEHOLDER_SUFFIX", "NoPlaceholderReplacer", "PlaceholderReplacer")

DEFAULT_PLACEHOLDER_PREFIX = "${"
DEFAULT_PLACEHOLDER_SUFFIX = "}"


class NoPlaceholderReplacer:
    """Replacer used when placeholder replacement is turned off."""

    __slots__ = ()

    def replace_placeholders(self, line: str) -> str:
        return line


class PlaceholderReplacer:
    """Replaces ``${name}`` style placeholders with configured values.

    Substitution is a single pass over the line, so a value that itself looks like a
    placeholder is left as is. Expressions left over without a configured value raise
    :class:`PlaceholderError`.

    Example:
        ```python
        replacer = PlaceholderReplacer({"schema": "app"})
        replacer.replace_placeholders("CREATE TABLE ${schema}.users (id INT);")
        # 'CREATE TABLE app.users (id INT);'
        ```
    """

    __slots__ = ("_pattern", "_placeholders", "_prefix", "_suffix")

    def __init__(
        self,
        placeholders: "Mapping[str, Optional[str]]",
        prefix: str = DEFAULT_PLACEHOLDER_PREFIX,
        suffix: str = DEFAULT_PLACEHOLDER_SUFFIX,
    ) -> None:
        """Initialize the replacer.

        Args:
            placeholders: Placeholder names mapped to their values. ``None`` values become empty strings.
            prefix: Text that opens a placeholder expression.
            suffix: Text that closes a placeholder expression.

        Raises:
            ImproperConfigurationError: If prefix or suffix is empty.
        """
        if not prefix or not suffix:
            msg = "Placeholder prefix and suffix must not be empty"
            raise ImproperConfigurationError(msg)
        self._placeholders = dict(placeholders)
        self._prefix = prefix
        self._suffix = suffix
        self._pattern = re.compile(re.escape(prefix) + "(.+?)" + re.escape(suffix))

    @property
    def placeholders(self) -> "dict[str, Optional[str]]":
        return dict(self._placeholders)

    def replace_placeholders(self, line: str) -> str:
        """Replace the placeholders in this line with their values.

        Args:
            line: A single line of script text.

        Raises:
            PlaceholderError: If the line holds placeholder expressions with no configured value.

        Returns:
            The line with every placeholder replaced.
        """
        if self._prefix not in line:
            return line

        unmatched: set[str] = set()

        def _substitute(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name not in self._placeholders:
                unmatched.add(match.group(0))
                return match.group(0)
            return self._placeholders[name] or ""

        replaced = self._pattern.sub(_substitute, line)
        if unmatched:
            raise PlaceholderError(sorted(unmatched))
        return replaced
