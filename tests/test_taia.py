import pytest

from fifotrigger.taia import Taia


def test_from_seconds():
    t = Taia.from_seconds(7)
    assert (t.sec, t.nano, t.atto) == (7, 0, 0)


def test_add_carries():
    a = Taia(1, 999_999_999, 999_999_999)
    b = Taia(0, 0, 1)
    assert a + b == Taia(2, 0, 0)


def test_sub_borrows():
    a = Taia(2, 0, 0)
    b = Taia(0, 0, 1)
    assert a - b == Taia(1, 999_999_999, 999_999_999)


@pytest.mark.parametrize(
    "a,b",
    [
        (Taia(10, 5, 6), Taia(3, 999_999_999, 7)),
        (Taia(100, 0, 0), Taia(99, 1, 1)),
        (Taia(5, 500, 500), Taia(0, 0, 0)),
    ],
)
def test_add_sub_round_trip(a, b):
    assert (a + b) - b == a
    assert (a - b) + b == a


def test_sub_self_is_zero():
    t = Taia(12345, 678, 9)
    assert t - t == Taia.from_seconds(0)


def test_sub_wraps_to_unsigned():
    assert (Taia.from_seconds(0) - Taia.from_seconds(1)).sec == (1 << 64) - 1


def test_ordering():
    assert Taia(1, 0, 0) < Taia(2, 0, 0)
    assert Taia(1, 1, 0) < Taia(1, 2, 0)
    assert Taia(1, 1, 1) < Taia(1, 1, 2)
    assert not Taia(1, 1, 1) < Taia(1, 1, 1)
    assert Taia(3, 0, 0) > Taia(2, 999_999_999, 999_999_999)


def test_frac_and_approx():
    t = Taia(4, 500_000_000, 0)
    assert t.frac() == pytest.approx(0.5)
    assert t.approx() == pytest.approx(4.5)
    assert Taia.from_seconds(9).frac() == 0.0


def test_now_is_after_epoch_label_and_monotone_enough():
    a = Taia.now()
    b = Taia.now()
    assert a.sec > 4611686018427387914
    assert not b < a - Taia.from_seconds(1)
    assert a.atto == 0
    assert a.nano % 1000 == 500


def test_deadline_difference():
    stamp = Taia.now()
    deadline = stamp + Taia.from_seconds(3)
    assert stamp < deadline
    assert (deadline - stamp).approx() == pytest.approx(3.0)


@pytest.mark.parametrize("args", [(-1, 0, 0), (0, 1_000_000_000, 0), (0, 0, -1), (1 << 64, 0, 0)])
def test_invalid_fields(args):
    with pytest.raises(ValueError):
        Taia(*args)