"""JSON encoding used by the structured log formatter."""

from typing import Any

import msgspec

__all__ = ("encode_json",)

_encoder = msgspec.json.Encoder()


def _default(value: Any) -> Any:
    return str(value)


def encode_json(data: Any) -> str:
    """Encode data to a JSON string.

    Values msgspec cannot serialize natively, such as paths, are rendered with ``str()``.

    Args:
        data: Data to encode.

    Returns:
        JSON string.
    """
    try:
        return _encoder.encode(data).decode("utf-8")
    except (TypeError, msgspec.EncodeError):
        return msgspec.json.encode(data, enc_hook=_default).decode("utf-8")
