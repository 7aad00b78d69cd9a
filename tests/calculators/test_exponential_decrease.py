"""Tests for the ExponentialDecrease auction calculator."""

import pytest

from stablecoin.protocol.calculators import ExponentialDecrease, cut_from_percent
from stablecoin.protocol.units import RAY, WAD, almost_equal, rmul

TOP = 50 * WAD


class TestFile:
    def test_file_cut(self) -> None:
        calc = ExponentialDecrease()
        calc.file("cut", 99 * 10**25)
        assert calc.cut == 99 * 10**25

    def test_cut_above_ray_rejected(self) -> None:
        with pytest.raises(ValueError, match="ExponentialDecrease/cut-gt-RAY"):
            ExponentialDecrease().file("cut", RAY + 1)

    def test_cut_equal_ray_allowed(self) -> None:
        calc = ExponentialDecrease(cut=RAY)
        assert calc.price(TOP, 1000) == TOP

    def test_file_unrecognized(self) -> None:
        with pytest.raises(ValueError, match="file-unrecognized-param"):
            ExponentialDecrease().file("tau", 60)


class TestPrice:
    def test_start_price_is_top(self) -> None:
        assert ExponentialDecrease(cut=99 * 10**25).price(TOP, 0) == TOP

    def test_one_percent_per_second(self) -> None:
        calc = ExponentialDecrease(cut=99 * 10**25)
        assert calc.price(TOP, 1) == 495 * 10**17
        assert calc.price(TOP, 2) == 49005 * 10**15
        assert calc.price(TOP, 3) == 4851495 * 10**13

    def test_zero_cut(self) -> None:
        calc = ExponentialDecrease(cut=0)
        assert calc.price(TOP, 0) == TOP
        assert calc.price(TOP, 1) == 0

    def test_matches_iterated_multiplication(self) -> None:
        cut = cut_from_percent("1.123456789")
        calc = ExponentialDecrease(cut=cut)

        expected = TOP
        for _ in range(60):
            expected = rmul(expected, cut)

        assert almost_equal(expected, calc.price(TOP, 60))
        assert almost_equal(25384375980898602822, calc.price(TOP, 60))


class TestCutFromPercent:
    def test_one_percent(self) -> None:
        assert cut_from_percent("1") == 99 * 10**25

    def test_zero_percent(self) -> None:
        assert cut_from_percent("0") == RAY

    def test_above_hundred_rejected(self) -> None:
        with pytest.raises(ValueError):
            cut_from_percent("101")
