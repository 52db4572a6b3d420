"""Generic statement builder shared by every dialect.

A builder accumulates the lines of exactly one statement. It tracks string
literals and block comments across lines so a delimiter inside a literal never
ends the statement, and exposes the dialect hooks the script splitter relies on:
comment recognition, delimiter directives and termination.

Dialects customize behavior by overriding the underscore hooks:

- ``_open_quote``: recognize an opening quote and return its closing text
- ``_find_closing_quote``: locate the closing text (escape handling)
- ``_delimiter_for_statement_start``: switch the delimiter for block statements

Statements that enable block tracking only terminate once every
``block_starters`` keyword has been closed by one of the ``block_enders``.
"""

import re
from typing import Optional

from mypy_extensions import mypyc_attr

from sqlscript.core.statement import DEFAULT_DELIMITER, Delimiter, SQLStatement

__all__ = ("SQLStatementBuilder",)

# Number of words kept from the start of a statement for delimiter switching
STATEMENT_START_WORDS = 8

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"\w+")

BUILDER_SLOTS = (
    "_block_depth",
    "_closing_quote",
    "_code_end",
    "_delimiter",
    "_explicit_delimiter",
    "_in_block_comment",
    "_line_number",
    "_lines",
    "_statement_start",
    "_strip_delimiter",
    "_terminated",
    "_tracks_blocks",
)


@mypyc_attr(allow_interpreted_subclasses=True)
class SQLStatementBuilder:
    """Accumulates the lines of one statement using generic SQL rules.

    Single-line comments start with ``--``, multi-line comments are ``/* ... */``,
    strings are ``'...'`` and quoted identifiers ``"..."``. The default delimiter
    is ``;``.
    """

    __slots__ = BUILDER_SLOTS

    line_comment_markers: "tuple[str, ...]" = ("--",)
    multiline_comment_start = "/*"
    multiline_comment_end = "*/"
    quote_pairs: "dict[str, str]" = {"'": "'", '"': '"'}
    block_starters: "frozenset[str]" = frozenset()
    block_enders: "frozenset[str]" = frozenset()

    def __init__(self, strip_delimiter: bool = False) -> None:
        """Initialize an empty builder.

        Args:
            strip_delimiter: Remove the terminating delimiter from the finished statement.
        """
        self._strip_delimiter = strip_delimiter
        self._lines: list[str] = []
        self._line_number = 0
        self._delimiter = self.default_delimiter()
        self._explicit_delimiter = False
        self._terminated = False
        self._closing_quote: Optional[str] = None
        self._in_block_comment = False
        self._statement_start = ""
        self._code_end = 0
        self._tracks_blocks = False
        self._block_depth = 0

    def default_delimiter(self) -> Delimiter:
        return DEFAULT_DELIMITER

    @property
    def delimiter(self) -> Delimiter:
        """Delimiter currently used to detect termination."""
        return self._delimiter

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_terminated(self) -> bool:
        return self._terminated

    def set_line_number(self, line_number: int) -> None:
        self._line_number = line_number

    def set_delimiter(self, delimiter: Delimiter) -> None:
        """Use a non-standard delimiter for this statement.

        An explicit delimiter also disables dialect-driven delimiter switching.
        """
        self._delimiter = delimiter
        self._explicit_delimiter = True

    def is_comment_directive(self, line: str) -> bool:  # noqa: ARG002
        return False

    def is_single_line_comment(self, line: str) -> bool:
        return line.startswith(self.line_comment_markers)

    def starts_multiline_comment(self, line: str) -> bool:
        return line.startswith(self.multiline_comment_start)

    def ends_multiline_comment(self, line: str) -> bool:
        return line.endswith(self.multiline_comment_end)

    def extract_new_delimiter(self, line: str) -> Optional[Delimiter]:  # noqa: ARG002
        return None

    def add_line(self, line: str) -> None:
        """Append a line to the statement and update the termination state.

        Args:
            line: Raw line, placeholders already replaced.
        """
        self._lines.append(line)
        code = self._simplify(self._scan(line))

        if code and not self._explicit_delimiter:
            self._update_statement_start(code)

        if self._tracks_blocks:
            self._count_blocks(code)

        if self._closing_quote is not None or self._in_block_comment or self._block_depth:
            return

        if self._is_terminated_by(code):
            self._terminated = True

    def get_statement(self) -> SQLStatement:
        """Finalize the accumulated lines into a statement.

        Returns:
            The statement, lines joined with ``\\n``.
        """
        sql = "\n".join(self._lines)
        if self._strip_delimiter and self._terminated:
            sql = self._remove_delimiter(sql)
        return SQLStatement(self._line_number, sql)

    def _is_terminated_by(self, code: str) -> bool:
        delimiter = self._delimiter.delimiter.upper()
        if self._delimiter.alone_on_line:
            return code == delimiter
        return code.endswith(delimiter)

    def _count_blocks(self, code: str) -> None:
        for word in _WORD_RE.findall(code):
            if word in self.block_starters:
                self._block_depth += 1
            elif word in self.block_enders and self._block_depth:
                self._block_depth -= 1

    def _remove_delimiter(self, sql: str) -> str:
        if self._delimiter.alone_on_line:
            head, _, _ = sql.rstrip().rpartition("\n")
            return head.rstrip()
        # The delimiter ends where the code of the last line ends, trailing comments follow it
        *head, last = self._lines
        delimiter = self._delimiter.delimiter
        start = self._code_end - len(delimiter)
        if start < 0 or last[start : self._code_end].upper() != delimiter.upper():
            return sql
        head.append(last[:start].rstrip() + last[self._code_end :])
        return "\n".join(head).rstrip()

    @staticmethod
    def _simplify(code: str) -> str:
        return code.replace("\t", " ").strip().upper()

    def _update_statement_start(self, code: str) -> None:
        if self._statement_start.count(" ") >= STATEMENT_START_WORDS:
            return
        self._statement_start = _WHITESPACE_RE.sub(" ", f"{self._statement_start} {code}").strip()
        new_delimiter = self._delimiter_for_statement_start(self._statement_start)
        if new_delimiter is not None:
            self._delimiter = new_delimiter

    def _delimiter_for_statement_start(self, statement_start: str) -> Optional[Delimiter]:  # noqa: ARG002
        """Return the delimiter a statement starting like this needs, if it differs."""
        return None

    def _scan(self, line: str) -> str:
        """Walk the line, tracking literals and comments.

        Literal contents are dropped so keywords and delimiters inside them are
        never seen. ``_code_end`` is left just after the last code character.

        Returns:
            The parts of the line outside comments, literals reduced to their quotes.
        """
        code: list[str] = []
        code_end = 0
        pos = 0
        length = len(line)
        while pos < length:
            if self._in_block_comment:
                end = line.find(self.multiline_comment_end, pos)
                if end == -1:
                    break
                self._in_block_comment = False
                pos = end + len(self.multiline_comment_end)
                continue

            if self._closing_quote is not None:
                end = self._find_closing_quote(line, pos, self._closing_quote)
                if end == -1:
                    break
                code.append(self._closing_quote)
                pos = code_end = end + len(self._closing_quote)
                self._closing_quote = None
                continue

            if line.startswith(self.line_comment_markers, pos):
                break

            if line.startswith(self.multiline_comment_start, pos):
                self._in_block_comment = True
                pos += len(self.multiline_comment_start)
                continue

            quote = self._open_quote(line, pos)
            if quote is not None:
                opening, closing = quote
                code.append(opening)
                self._closing_quote = closing
                pos = code_end = pos + len(opening)
                continue

            char = line[pos]
            code.append(char)
            pos += 1
            if not char.isspace():
                code_end = pos

        self._code_end = code_end
        return "".join(code)

    def _open_quote(self, line: str, pos: int) -> "Optional[tuple[str, str]]":
        char = line[pos]
        if char in self.quote_pairs:
            return char, self.quote_pairs[char]
        return None

    def _find_closing_quote(self, line: str, pos: int, closing: str) -> int:
        return line.find(closing, pos)

    @staticmethod
    def _is_word_boundary(line: str, pos: int) -> bool:
        return pos == 0 or not (line[pos - 1].isalnum() or line[pos - 1] == "_")
