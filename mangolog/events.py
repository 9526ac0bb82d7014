"""Event records written to the program log, with their binary and log-line forms."""

from __future__ import annotations

import base64
import hashlib
import io
from dataclasses import dataclass, field, fields
from typing import ClassVar, Iterable, Iterator

from mangolog.ids import PUBKEY_LENGTH, Pubkey

MARKER = "mango-log"
_LOG_PREFIX = "Program log: "
DISCRIMINATOR_LENGTH = 8

_INTS = {
    "u8": (1, False),
    "u32": (4, False),
    "u64": (8, False),
    "i64": (8, True),
    "i128": (16, True),
}


def _field(kind: str):
    return field(metadata={"borsh": kind})


def _vec_item(kind: str) -> str | None:
    if kind.startswith("vec<") and kind.endswith(">"):
        return kind[4:-1]
    return None


def _encode_value(kind: str, value) -> bytes:
    if kind in _INTS:
        size, signed = _INTS[kind]
        return int(value).to_bytes(size, "little", signed=signed)
    if kind == "bool":
        return b"\x01" if value else b"\x00"
    if kind == "pubkey":
        return bytes(value)
    item = _vec_item(kind)
    if item is not None:
        items = list(value)
        return _encode_value("u32", len(items)) + b"".join(
            _encode_value(item, v) for v in items
        )
    raise TypeError(f"unknown field kind {kind!r}")


def _take(stream: io.BytesIO, size: int) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise ValueError("unexpected end of event data")
    return chunk


def _decode_value(kind: str, stream: io.BytesIO):
    if kind in _INTS:
        size, signed = _INTS[kind]
        return int.from_bytes(_take(stream, size), "little", signed=signed)
    if kind == "bool":
        flag = _take(stream, 1)[0]
        if flag > 1:
            raise ValueError(f"invalid bool byte {flag}")
        return bool(flag)
    if kind == "pubkey":
        return Pubkey(_take(stream, PUBKEY_LENGTH))
    item = _vec_item(kind)
    if item is not None:
        count = _decode_value("u32", stream)
        return [_decode_value(item, stream) for _ in range(count)]
    raise TypeError(f"unknown field kind {kind!r}")


class Event:
    """Base for log events; each is prefixed by an 8-byte discriminator."""

    _registry: ClassVar[dict[bytes, type[Event]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        Event._registry[cls.discriminator()] = cls

    @classmethod
    def discriminator(cls) -> bytes:
        return hashlib.sha256(f"event:{cls.__name__}".encode()).digest()[:DISCRIMINATOR_LENGTH]

    def encode(self) -> bytes:
        body = b"".join(
            _encode_value(f.metadata["borsh"], getattr(self, f.name)) for f in fields(self)
        )
        return self.discriminator() + body

    @classmethod
    def decode(cls, data: bytes) -> Event:
        raw = bytes(data)
        if cls is Event:
            return decode_event(raw)
        if raw[:DISCRIMINATOR_LENGTH] != cls.discriminator():
            raise ValueError(f"data is not a {cls.__name__}")
        stream = io.BytesIO(raw[DISCRIMINATOR_LENGTH:])
        values = {f.name: _decode_value(f.metadata["borsh"], stream) for f in fields(cls)}
        if stream.read(1):
            raise ValueError(f"trailing bytes after {cls.__name__}")
        return cls(**values)


def decode_event(data: bytes) -> Event:
    """Decode any known event, chosen by its discriminator."""
    raw = bytes(data)
    event_type = Event._registry.get(raw[:DISCRIMINATOR_LENGTH])
    if event_type is None:
        raise ValueError("unknown event discriminator")
    return event_type.decode(raw)


def mango_emit(event: Event) -> list[str]:
    """The log lines that announce and carry ``event``."""
    return [MARKER, base64.b64encode(event.encode()).decode("ascii")]


def parse_mango_logs(lines: Iterable[str]) -> Iterator[Event]:
    """Yield the events announced by marker lines in a program log."""
    expecting = False
    for raw in lines:
        line = raw.strip().removeprefix(_LOG_PREFIX)
        if expecting:
            expecting = False
            yield decode_event(base64.b64decode(line, validate=True))
        elif line == MARKER:
            expecting = True


@dataclass
class FillLog(Event):
    mango_group: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    taker_side: int = _field("u8")
    maker_slot: int = _field("u8")
    maker_out: bool = _field("bool")
    timestamp: int = _field("u64")
    seq_num: int = _field("u64")
    maker: Pubkey = _field("pubkey")
    maker_order_id: int = _field("i128")
    maker_client_order_id: int = _field("u64")
    maker_fee: int = _field("i128")
    best_initial: int = _field("i64")
    maker_timestamp: int = _field("u64")
    taker: Pubkey = _field("pubkey")
    taker_order_id: int = _field("i128")
    taker_client_order_id: int = _field("u64")
    taker_fee: int = _field("i128")
    price: int = _field("i64")
    quantity: int = _field("i64")


@dataclass
class TokenBalanceLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    token_index: int = _field("u64")
    deposit: int = _field("i128")
    borrow: int = _field("i128")


@dataclass
class CachePricesLog(Event):
    mango_group: Pubkey = _field("pubkey")
    oracle_indexes: list[int] = _field("vec<u64>")
    oracle_prices: list[int] = _field("vec<i128>")


@dataclass
class CacheRootBanksLog(Event):
    mango_group: Pubkey = _field("pubkey")
    token_indexes: list[int] = _field("vec<u64>")
    deposit_indexes: list[int] = _field("vec<i128>")
    borrow_indexes: list[int] = _field("vec<i128>")


@dataclass
class CachePerpMarketsLog(Event):
    mango_group: Pubkey = _field("pubkey")
    market_indexes: list[int] = _field("vec<u64>")
    long_fundings: list[int] = _field("vec<i128>")
    short_fundings: list[int] = _field("vec<i128>")


@dataclass
class SettlePnlLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account_a: Pubkey = _field("pubkey")
    mango_account_b: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    settlement: int = _field("i128")


@dataclass
class SettleFeesLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    settlement: int = _field("i128")


@dataclass
class LiquidateTokenAndTokenLog(Event):
    mango_group: Pubkey = _field("pubkey")
    liqee: Pubkey = _field("pubkey")
    liqor: Pubkey = _field("pubkey")
    asset_index: int = _field("u64")
    liab_index: int = _field("u64")
    asset_transfer: int = _field("i128")
    liab_transfer: int = _field("i128")
    asset_price: int = _field("i128")
    liab_price: int = _field("i128")
    bankruptcy: bool = _field("bool")


@dataclass
class LiquidateTokenAndPerpLog(Event):
    mango_group: Pubkey = _field("pubkey")
    liqee: Pubkey = _field("pubkey")
    liqor: Pubkey = _field("pubkey")
    asset_index: int = _field("u64")
    liab_index: int = _field("u64")
    asset_type: int = _field("u8")
    liab_type: int = _field("u8")
    asset_price: int = _field("i128")
    liab_price: int = _field("i128")
    asset_transfer: int = _field("i128")
    liab_transfer: int = _field("i128")
    bankruptcy: bool = _field("bool")


@dataclass
class LiquidatePerpMarketLog(Event):
    mango_group: Pubkey = _field("pubkey")
    liqee: Pubkey = _field("pubkey")
    liqor: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    price: int = _field("i128")
    base_transfer: int = _field("i64")
    quote_transfer: int = _field("i128")
    bankruptcy: bool = _field("bool")


@dataclass
class PerpBankruptcyLog(Event):
    mango_group: Pubkey = _field("pubkey")
    liqee: Pubkey = _field("pubkey")
    liqor: Pubkey = _field("pubkey")
    liab_index: int = _field("u64")
    insurance_transfer: int = _field("u64")
    socialized_loss: int = _field("i128")
    cache_long_funding: int = _field("i128")
    cache_short_funding: int = _field("i128")


@dataclass
class TokenBankruptcyLog(Event):
    mango_group: Pubkey = _field("pubkey")
    liqee: Pubkey = _field("pubkey")
    liqor: Pubkey = _field("pubkey")
    liab_index: int = _field("u64")
    insurance_transfer: int = _field("u64")
    socialized_loss: int = _field("i128")
    percentage_loss: int = _field("i128")
    cache_deposit_index: int = _field("i128")


@dataclass
class UpdateRootBankLog(Event):
    mango_group: Pubkey = _field("pubkey")
    token_index: int = _field("u64")
    deposit_index: int = _field("i128")
    borrow_index: int = _field("i128")


@dataclass
class UpdateFundingLog(Event):
    mango_group: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    long_funding: int = _field("i128")
    short_funding: int = _field("i128")


@dataclass
class OpenOrdersBalanceLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    base_total: int = _field("u64")
    base_free: int = _field("u64")
    quote_total: int = _field("u64")
    quote_free: int = _field("u64")
    referrer_rebates_accrued: int = _field("u64")


@dataclass
class MngoAccrualLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    mngo_accrual: int = _field("u64")


@dataclass
class WithdrawLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    owner: Pubkey = _field("pubkey")
    token_index: int = _field("u64")
    quantity: int = _field("u64")


@dataclass
class DepositLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    owner: Pubkey = _field("pubkey")
    token_index: int = _field("u64")
    quantity: int = _field("u64")


@dataclass
class RedeemMngoLog(Event):
    mango_group: Pubkey = _field("pubkey")
    mango_account: Pubkey = _field("pubkey")
    market_index: int = _field("u64")
    redeemed_mngo: int = _field("u64")