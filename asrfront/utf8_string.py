"""UTF-8 aware string helpers: character counting, splitting and trimming."""

from __future__ import annotations

from collections.abc import Iterator

WHITESPACE = " \n\r\t\f\v"


def char_length(byte: int) -> int:
    """Return the number of bytes in the UTF-8 sequence that starts with ``byte``.

    Continuation bytes count as a single byte. Bytes that can never start a
    sequence (0xF8 and above) raise ``ValueError``.
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"not a byte value: {byte}")
    if (byte & 0xF8) > 0xF0:
        raise ValueError(f"invalid UTF-8 lead byte 0x{byte:02X}")
    if (byte & 0x80) == 0x00:
        return 1
    if (byte & 0xE0) == 0xC0:
        return 2
    if (byte & 0xF0) == 0xE0:
        return 3
    if (byte & 0xF8) == 0xF0:
        return 4
    return 1


def _as_bytes(text: str | bytes | bytearray) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def _spans(data: bytes) -> Iterator[tuple[int, int]]:
    start = 0
    while start < len(data):
        end = start + char_length(data[start])
        yield start, end
        start = end


def string_length(text: str | bytes | bytearray) -> int:
    """Count the UTF-8 characters in ``text``."""
    return sum(1 for _ in _spans(_as_bytes(text)))


def string_to_chars(text: str | bytes | bytearray) -> list:
    """Split ``text`` into its UTF-8 characters.

    A ``str`` gives a list of ``str``; bytes give a list of ``bytes`` chunks.
    """
    data = _as_bytes(text)
    chunks = [data[start:end] for start, end in _spans(data)]
    if isinstance(text, str):
        return [chunk.decode("utf-8") for chunk in chunks]
    return chunks


def ltrim(text: str) -> str:
    """Strip leading whitespace."""
    return text.lstrip(WHITESPACE)


def rtrim(text: str) -> str:
    """Strip trailing whitespace."""
    return text.rstrip(WHITESPACE)


def trim(text: str) -> str:
    """Strip whitespace from both ends."""
    return rtrim(ltrim(text))


def split_string(text: str, delim: str) -> list[str]:
    """Split ``text`` at every occurrence of ``delim``, keeping empty fields."""
    if not delim:
        raise ValueError("delimiter must not be empty")
    return text.split(delim)