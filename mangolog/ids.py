"""Public keys, base58 text form, and the well-known token mint ids."""

from __future__ import annotations

from dataclasses import dataclass

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

PUBKEY_LENGTH = 32


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text."""
    raw = bytes(data)
    stripped = raw.lstrip(b"\0")
    leading = len(raw) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes."""
    stripped = text.lstrip("1")
    leading = len(text) - len(stripped)
    number = 0
    for ch in stripped:
        try:
            number = number * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character {ch!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading + body


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte account address."""

    key: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.key)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(f"a public key is {PUBKEY_LENGTH} bytes, got {len(raw)}")
        object.__setattr__(self, "key", raw)

    @classmethod
    def from_base58(cls, text: str) -> Pubkey:
        return cls(b58decode(text))

    def to_base58(self) -> str:
        return b58encode(self.key)

    @classmethod
    def default(cls) -> Pubkey:
        """The all-zero key."""
        return cls(bytes(PUBKEY_LENGTH))

    def __bytes__(self) -> bytes:
        return self.key

    def __str__(self) -> str:
        return self.to_base58()


@dataclass(frozen=True)
class TokenIds:
    """Mint addresses of the SRM, MSRM and MNGO tokens."""

    srm: Pubkey
    msrm: Pubkey
    mngo: Pubkey


_MAINNET = (
    "SRMuApVNdxXokk5GT7XD5cUUgXMBCoAz2LHeuAoKWRt",
    "MSRMcoVyrFxnSgo5uXwone5SKcGhT1KEJMFEkMEWf9L",
    "MangoCzJ36AjZyKwVj3VnYU4GTonjfVEnJmvvWaxLac",
)
_DEVNET = (
    "AvtB6w9xboLwA145E221vhof5TddhqsChYcx7Fy3xVMH",
    "8DJBo4bF4mHNxobjdax3BL9RMh5o71Jf8UiKsf5C5eVH",
    "Bb9bsTQa1bGEtQ5KagGkvSHyuLqDWumFUcRqFusFNJWC",
)


def token_ids(devnet: bool = False) -> TokenIds:
    """Token mint ids for devnet or, by default, mainnet."""
    srm, msrm, mngo = (Pubkey.from_base58(s) for s in (_DEVNET if devnet else _MAINNET))
    return TokenIds(srm=srm, msrm=msrm, mngo=mngo)