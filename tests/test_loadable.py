from dataclasses import dataclass

import pytest

from mangolog.loadable import Loadable, load_from_bytes, zeroed


@dataclass
class Header(Loadable):
    _layout = "Q?7x32s"
    counter: int
    enabled: bool
    owner: bytes


@dataclass
class Mismatched(Loadable):
    _layout = "QQ"
    only: int


class Plain(Loadable):
    _layout = "Q"


def test_round_trip():
    header = Header(5, True, bytes(range(32)))
    assert load_from_bytes(Header, header.to_bytes()) == header


def test_size_matches_encoding():
    record = zeroed(Header)
    assert len(Loadable.to_bytes(record)) == Header.size()
    assert Header.size() == 48


def test_zeroed_has_zero_fields_and_bytes():
    record = zeroed(Header)
    assert record.counter == 0
    assert record.enabled is False
    assert record.owner == bytes(32)
    assert record.to_bytes() == bytes(Header.size())


def test_little_endian_encoding():
    raw = b"\x01" + bytes(7) + b"\x00" + bytes(7) + bytes(32)
    record = load_from_bytes(Header, raw)
    assert record.counter == 1
    assert Loadable.to_bytes(record)[:8] == b"\x01" + bytes(7)


@pytest.mark.parametrize("delta", [-1, 1])
def test_wrong_length_rejected(delta):
    with pytest.raises(ValueError):
        load_from_bytes(Header, bytes(Header.size() + delta))


def test_accepts_buffer_types():
    header = Header(9, True, b"\xaa" * 32)
    raw = header.to_bytes()
    assert load_from_bytes(Header, bytearray(raw)) == header
    assert load_from_bytes(Header, memoryview(raw)) == header


def test_non_dataclass_rejected():
    with pytest.raises(TypeError):
        zeroed(Plain)


def test_field_count_mismatch_rejected():
    with pytest.raises(TypeError):
        zeroed(Mismatched)


def test_out_of_range_value_rejected():
    with pytest.raises(ValueError):
        Loadable.to_bytes(Header(-1, True, bytes(32)))