"""Tests for the StairstepExponentialDecrease auction calculator."""

import pytest

from stablecoin.protocol.calculators import StairstepExponentialDecrease, cut_from_percent
from stablecoin.protocol.units import RAY, WAD

TOP = 50 * WAD
LOW_TOP = 10**9


def _calculator(percent: str, step: int) -> StairstepExponentialDecrease:
    return StairstepExponentialDecrease(cut=cut_from_percent(percent), step=step)


class TestFile:
    def test_file_step(self) -> None:
        calc = StairstepExponentialDecrease()
        calc.file("step", 90)
        assert calc.step == 90

    def test_file_cut_above_ray(self) -> None:
        with pytest.raises(ValueError, match="StairstepExponentialDecrease/cut-gt-RAY"):
            StairstepExponentialDecrease().file("cut", RAY + 1)

    def test_file_unrecognized(self) -> None:
        with pytest.raises(ValueError, match="StairstepExponentialDecrease/file-unrecognized-param"):
            StairstepExponentialDecrease().file("tau", 1)

    def test_zero_step_rejected_on_price(self) -> None:
        calc = StairstepExponentialDecrease(cut=99 * 10**25, step=0)
        with pytest.raises(ValueError, match="zero-step"):
            calc.price(TOP, 1)


class TestPrice:
    @pytest.mark.parametrize(
        "percent, dur, step, expected",
        [
            ("1.123456789", 1, 1, 49438271605500000000),
            ("1.123456789", 60, 1, 25384375980898602842),
            ("1.123456789", 60, 5, 43660560004238132027),
            ("2.123456789", 1, 1, 48938271605500000000),
            ("2.123456789", 60, 1, 13793909126329075429),
            ("2.123456789", 60, 5, 38646794298032588404),
        ],
    )
    def test_known_prices(self, percent: str, dur: int, step: int, expected: int) -> None:
        assert _calculator(percent, step).price(TOP, dur) == expected

    @pytest.mark.parametrize(
        "percent, dur, expected",
        [
            ("1.123456789", 1, 988765432),
            ("1.123456789", 60, 507687519),
            ("2.123456789", 1, 978765432),
            ("2.123456789", 60, 275878182),
        ],
    )
    def test_low_top(self, percent: str, dur: int, expected: int) -> None:
        assert _calculator(percent, 1).price(LOW_TOP, dur) == expected

    def test_ninety_nine_percent_cut(self) -> None:
        assert _calculator("99", 1).price(TOP, 1) == 5 * 10**17

    def test_unchanged_within_first_step(self) -> None:
        calc = _calculator("1.123456789", 5)
        assert calc.price(TOP, 1) == TOP
        assert calc.price(TOP, 4) == TOP

    def test_flat_between_steps(self) -> None:
        calc = _calculator("1", 10)
        assert calc.price(TOP, 10) == calc.price(TOP, 19)
        assert calc.price(TOP, 20) < calc.price(TOP, 19)
