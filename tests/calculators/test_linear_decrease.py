"""Tests for the LinearDecrease auction calculator."""

import pytest

from stablecoin.protocol.calculators import LinearDecrease
from stablecoin.protocol.units import RAY, WAD

TOP = 50 * WAD


@pytest.fixture
def calculator() -> LinearDecrease:
    return LinearDecrease(tau=60)


class TestFile:
    def test_file_tau(self) -> None:
        calc = LinearDecrease()
        calc.file("tau", 3600)
        assert calc.tau == 3600

    def test_file_unrecognized(self) -> None:
        with pytest.raises(ValueError, match="LinearDecrease/file-unrecognized-param"):
            LinearDecrease().file("cut", RAY)


class TestPrice:
    def test_start_price_is_top(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 0) == TOP

    def test_after_one_second(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 1) == 49166666666666666666

    def test_after_two_seconds(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 2) == 48333333333333333333

    def test_one_second_before_tau(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 59) == 833333333333333333

    def test_zero_at_tau(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 60) == 0

    def test_zero_after_tau(self, calculator: LinearDecrease) -> None:
        assert calculator.price(TOP, 61) == 0

    def test_zero_tau_is_always_zero(self) -> None:
        assert LinearDecrease().price(TOP, 0) == 0

    def test_non_increasing(self, calculator: LinearDecrease) -> None:
        prices = [calculator.price(TOP, t) for t in range(70)]
        assert prices == sorted(prices, reverse=True)

    def test_negative_duration_rejected(self, calculator: LinearDecrease) -> None:
        with pytest.raises(ValueError):
            calculator.price(TOP, -1)


class TestPriceCurve:
    def test_columns_and_bounds(self, calculator: LinearDecrease) -> None:
        df = calculator.price_curve(TOP, 60, n_points=61)
        assert list(df.columns) == ["elapsed", "price", "price_float"]
        assert len(df) == 61
        assert df["price"].iloc[0] == TOP
        assert df["price"].iloc[-1] == 0
        assert df["price_float"].iloc[0] == pytest.approx(1.0)
