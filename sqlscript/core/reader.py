"""Line reader feeding the script splitter."""

import io
from typing import TextIO, Union

from sqlscript.exceptions import StreamReadError

__all__ = ("read_lines",)


def read_lines(source: "Union[str, TextIO]") -> "list[str]":
    """Read textual data into a list of lines.

    Lines are split on ``\\n``, ``\\r\\n`` and ``\\r``. Empty lines are kept, and a
    final line terminator does not produce an extra empty line.

    Args:
        source: Script text, or a text stream to consume fully.

    Raises:
        StreamReadError: If the stream cannot be consumed.

    Returns:
        The lines, in order.
    """
    stream = io.StringIO(source, newline=None) if isinstance(source, str) else source
    try:
        return [line.rstrip("\r\n") for line in stream]
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise StreamReadError from e
