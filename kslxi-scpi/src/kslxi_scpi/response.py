"""Response value types.

An instrument answers a query with either a line of text or a definite-length
binary block. :data:`ResponseValue` is the union of the two immutable
variants :class:`Text` and :class:`Binary`.

Example:
    >>> value = decode(stream)
    >>> if isinstance(value, Text):
    ...     print(value.value)
    ... else:
    ...     samples = value.data
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class Text:
    """A text response line with its terminator stripped.

    Attributes:
        value: The decoded UTF-8 text.
    """

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Binary:
    """A binary block payload of exactly the declared length.

    Attributes:
        data: The raw payload bytes, terminator excluded.
    """

    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def __len__(self) -> int:
        return len(self.data)


ResponseValue = Union[Text, Binary]


def from_text(value: str) -> Text:
    """Wrap a string as a text response."""
    return Text(value)


def from_bin(data: bytes | bytearray | Iterable[int]) -> Binary:
    """Wrap a bytes-like payload as a binary response."""
    return Binary(bytes(data))


def as_text(value: ResponseValue) -> str | None:
    """Return the text of a response, or None for a binary response."""
    if isinstance(value, Text):
        return value.value
    return None


def as_binary(value: ResponseValue) -> bytes | None:
    """Return the payload of a response, or None for a text response."""
    if isinstance(value, Binary):
        return value.data
    return None
