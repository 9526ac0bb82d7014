import pytest

from mangolog import events as ev
from mangolog.ids import Pubkey


def key(n):
    return Pubkey(bytes([n]) * 32)


def sample_events():
    return [
        ev.FillLog(
            key(1), 3, 1, 7, True, 1_600_000_000, 42,
            key(2), -(2**100), 11, -5,
            -123, 1_600_000_001,
            key(3), 2**120, 12, 9,
            10_000, 25,
        ),
        ev.TokenBalanceLog(key(1), key(2), 4, 2**90, -(2**90)),
        ev.CachePricesLog(key(1), [1, 2], [10, -20]),
        ev.CacheRootBanksLog(key(1), [], [], []),
        ev.CachePerpMarketsLog(key(1), [0], [5], [-5]),
        ev.SettlePnlLog(key(1), key(2), key(3), 6, -77),
        ev.SettleFeesLog(key(1), key(2), 6, 77),
        ev.LiquidateTokenAndTokenLog(key(1), key(2), key(3), 1, 2, 3, 4, 5, 6, False),
        ev.LiquidateTokenAndPerpLog(key(1), key(2), key(3), 1, 2, 0, 1, 3, 4, 5, 6, True),
        ev.LiquidatePerpMarketLog(key(1), key(2), key(3), 1, 2, -3, 4, True),
        ev.PerpBankruptcyLog(key(1), key(2), key(3), 1, 2, 3, 4, 5),
        ev.TokenBankruptcyLog(key(1), key(2), key(3), 1, 2, 3, 4, 5),
        ev.UpdateRootBankLog(key(1), 2, 3, 4),
        ev.UpdateFundingLog(key(1), 2, -3, 4),
        ev.OpenOrdersBalanceLog(key(1), key(2), 1, 2, 3, 4, 5, 6),
        ev.MngoAccrualLog(key(1), key(2), 1, 2),
        ev.WithdrawLog(key(1), key(2), key(3), 1, 2),
        ev.DepositLog(key(1), key(2), key(3), 1, 2),
        ev.RedeemMngoLog(key(1), key(2), 1, 2),
    ]


@pytest.mark.parametrize("event", sample_events(), ids=lambda e: type(e).__name__)
def test_round_trip(event):
    data = event.encode()
    assert type(event).decode(data) == event
    assert ev.decode_event(data) == event
    assert ev.Event.decode(data) == event


def test_discriminators_prefix_and_unique():
    samples = sample_events()
    discriminators = {type(e).discriminator() for e in samples}
    assert len(discriminators) == len(samples)
    for event in samples:
        assert len(type(event).discriminator()) == 8
        assert event.encode()[:8] == type(event).discriminator()


def test_fixed_layout_length():
    assert len(ev.WithdrawLog(key(1), key(2), key(3), 1, 2).encode()) == 120


def test_vector_length_prefix():
    data = ev.CachePricesLog(key(1), [1, 2], [10, -20]).encode()
    assert data[8 + 32 : 8 + 36] == b"\x02\x00\x00\x00"


def test_wrong_type_rejected():
    data = ev.WithdrawLog(key(1), key(2), key(3), 1, 2).encode()
    with pytest.raises(ValueError):
        ev.DepositLog.decode(data)


def test_unknown_discriminator_rejected():
    with pytest.raises(ValueError):
        ev.decode_event(bytes(8))


def test_truncated_and_trailing_rejected():
    data = ev.UpdateRootBankLog(key(1), 2, 3, 4).encode()
    with pytest.raises(ValueError):
        ev.UpdateRootBankLog.decode(data[:-1])
    with pytest.raises(ValueError):
        ev.UpdateRootBankLog.decode(data + b"\x00")


def test_invalid_bool_rejected():
    data = ev.LiquidatePerpMarketLog(key(1), key(2), key(3), 1, 2, 3, 4, True).encode()
    with pytest.raises(ValueError):
        ev.LiquidatePerpMarketLog.decode(data[:-1] + b"\x02")


def test_out_of_range_rejected():
    with pytest.raises(OverflowError):
        ev.DepositLog(key(1), key(2), key(3), -1, 2).encode()


def test_emit_lines():
    event = ev.RedeemMngoLog(key(1), key(2), 1, 2)
    lines = ev.mango_emit(event)
    assert lines[0] == "mango-log"
    assert list(ev.parse_mango_logs(lines)) == [event]


def test_parse_logs_skips_unmarked_lines():
    first = ev.DepositLog(key(1), key(2), key(3), 1, 500)
    second = ev.UpdateFundingLog(key(4), 2, -3, 4)
    noise = ev.mango_emit(ev.MngoAccrualLog(key(1), key(2), 1, 2))[1]
    lines = [
        "Program log: Instruction: Deposit",
        "Program log: " + noise,
        *("Program log: " + line for line in ev.mango_emit(first)),
        "Program log: something else",
        *ev.mango_emit(second),
    ]
    assert list(ev.parse_mango_logs(lines)) == [first, second]


def test_parse_logs_rejects_bad_payload():
    with pytest.raises(ValueError):
        list(ev.parse_mango_logs(["mango-log", "not base64!"]))