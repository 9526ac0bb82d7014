"""Fixed-layout records that map directly onto raw account bytes."""

from __future__ import annotations

import dataclasses
import struct
from functools import lru_cache
from typing import ClassVar, TypeVar

T = TypeVar("T", bound="Loadable")

_BYTE_ORDER_MARKS = "@=<>!"


class Loadable:
    """Base for dataclasses whose fields map one-to-one onto a ``struct`` layout.

    Subclasses set ``_layout`` to a ``struct`` format string. Without an
    explicit byte-order mark the layout is little-endian and packed.
    """

    _layout: ClassVar[str] = ""

    @classmethod
    def size(cls) -> int:
        """Number of bytes one record occupies."""
        return _compiled(cls).size

    def to_bytes(self) -> bytes:
        """Serialise the record into its fixed-size byte form."""
        layout = _compiled(type(self))
        values = [getattr(self, f.name) for f in dataclasses.fields(self)]
        try:
            return layout.pack(*values)
        except struct.error as exc:
            raise ValueError(f"cannot pack {type(self).__name__}: {exc}") from exc


@lru_cache(maxsize=None)
def _compiled(cls: type) -> struct.Struct:
    if not (
        isinstance(cls, type)
        and issubclass(cls, Loadable)
        and dataclasses.is_dataclass(cls)
    ):
        raise TypeError(f"{cls!r} is not a Loadable dataclass")
    fmt = cls._layout
    if not fmt:
        raise TypeError(f"{cls.__name__} declares no layout")
    if fmt[0] not in _BYTE_ORDER_MARKS:
        fmt = "<" + fmt
    try:
        layout = struct.Struct(fmt)
    except struct.error as exc:
        raise TypeError(f"{cls.__name__} has an invalid layout: {exc}") from exc
    items = len(layout.unpack(bytes(layout.size)))
    field_count = len(dataclasses.fields(cls))
    if items != field_count:
        raise TypeError(
            f"{cls.__name__} layout yields {items} values for {field_count} fields"
        )
    return layout


def load_from_bytes(cls: type[T], data: bytes | bytearray | memoryview) -> T:
    """Read a record of type ``cls`` from exactly ``cls.size()`` bytes."""
    layout = _compiled(cls)
    raw = bytes(data)
    if len(raw) != layout.size:
        raise ValueError(
            f"{cls.__name__} needs {layout.size} bytes, got {len(raw)}"
        )
    return cls(*layout.unpack(raw))


def zeroed(cls: type[T]) -> T:
    """A record of type ``cls`` whose bytes are all zero."""
    return load_from_bytes(cls, bytes(_compiled(cls).size))