# mangolog

Building blocks for working with the data of an on-chain margin trading
program. The package needs nothing beyond the standard library.

It contains:

- **`mangolog.events`**: the program's event records (fills, deposits,
  withdrawals, liquidations, cache updates and more). They encode to and
  decode from their binary form, and they can be read back out of a
  transaction's program log.
- **`mangolog.errors`**: the program's error codes with their messages,
  the source-file identifiers, and helpers that raise `MangoError` with
  a line and a file attached.
- **`mangolog.ids`**: 32-byte public keys with base58 encoding and
  decoding, and the well-known token mint identifiers for mainnet and
  devnet.
- **`mangolog.loadable`**: a base class for fixed-layout records that
  read from and write to raw bytes.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Events

```python
from mangolog.events import DepositLog, decode_event, mango_emit, parse_mango_logs
from mangolog.ids import Pubkey

event = DepositLog(
    mango_group=Pubkey.default(),
    mango_account=Pubkey.default(),
    owner=Pubkey.default(),
    token_index=0,
    quantity=1_000_000,
)

data = event.encode()              # discriminator followed by the fields
assert decode_event(data) == event
assert DepositLog.decode(data) == event

lines = mango_emit(event)          # ["mango-log", <base64 of the encoded event>]
assert list(parse_mango_logs(lines)) == [event]
```

Every event class has `discriminator()`, which gives the 8-byte tag
written in front of its encoded fields: the first 8 bytes of the SHA-256
digest of `event:<ClassName>`. `decode_event` uses that tag to pick the
right class and raises `ValueError` for an unknown tag, truncated data or
trailing bytes.

`parse_mango_logs` takes log lines, with or without a leading
`Program log: `, and yields the event found on the line after each
`mango-log` marker line. Other lines are ignored.

## Errors

```python
from mangolog.errors import (
    ErrorChecker, MangoError, MangoErrorCode, SourceFileId, to_program_error,
)

checker = ErrorChecker(SourceFileId.PROCESSOR)
try:
    checker.check(False, MangoErrorCode.InsufficientFunds)
except MangoError as exc:
    print(exc)                     # MangoErrorCode::InsufficientFunds; src/processor.rs:<line>
    print(to_program_error(exc))   # Custom program error: 0x7
```

`check_assert(cond, code, line, source_file_id)` does the same check
with the line given explicitly. `ErrorChecker` also offers `check_eq`,
which raises unless two values are equal, and `throw`, `throw_err` and
`math_err`, which return a `MangoError` (with the `Default`, the given,
or the `MathError` code) for the caller to raise. The line recorded is
the line of the call.

`MangoErrorCode.message()` gives the code's description. A `MangoError`
may instead wrap a `ProgramError` (`MangoError(program_error=...)`);
`to_program_error` then returns that error unchanged.

## Identifiers

```python
from mangolog.ids import Pubkey, b58decode, b58encode, token_ids

mainnet = token_ids(devnet=False)
print(mainnet.mngo.to_base58())

key = Pubkey.from_base58(mainnet.srm.to_base58())
assert key == mainnet.srm
assert b58decode(b58encode(b"\x00\x01")) == b"\x00\x01"
```

A `Pubkey` must be exactly 32 bytes; `Pubkey.default()` is the all-zero
key. `b58decode` raises `ValueError` on characters outside the base58
alphabet.

## Fixed-layout records

Subclass `Loadable` with a dataclass and set `_layout` to a `struct`
format string with one item per field. Without a byte-order mark the
layout is read as little-endian and packed.

```python
from dataclasses import dataclass
from mangolog.loadable import Loadable, load_from_bytes, zeroed

@dataclass
class Balance(Loadable):
    _layout = "Qq"
    deposits: int
    borrows: int

assert Balance.size() == 16
record = Balance(5, -3)
assert load_from_bytes(Balance, record.to_bytes()) == record
assert zeroed(Balance) == Balance(0, 0)
```

`load_from_bytes` raises `ValueError` unless it gets exactly `size()`
bytes; a class without a valid layout raises `TypeError`.

## What this package does not do

It works only with data handed to it. It does not connect to a cluster,
fetch accounts or transaction logs, build or send instructions, or carry
out any of the program's trading, lending or liquidation logic.