"""Auction price calculators (linear, exponential, stairstep exponential).

Replicates the LinearDecrease, ExponentialDecrease and
StairstepExponentialDecrease contracts.  ``top`` is the starting price
(wad or ray, the result keeps its unit), ``dur`` the seconds elapsed
since the auction started.
"""

from abc import ABC, abstractmethod

import numpy as np
import pandas as pd

from stablecoin.protocol.units import RAY, parse_units, rmul, rpow


class PriceCalculator(ABC):
    """Abstract auction price decay curve."""

    name: str = "PriceCalculator"

    @abstractmethod
    def price(self, top: int, dur: int) -> int:
        """Price after ``dur`` seconds for an auction starting at ``top``."""

    @abstractmethod
    def file(self, what: str, data: int) -> None:
        """Set a named parameter, like the contracts' ``file(bytes32, uint256)``."""

    def _unrecognized(self, what: str) -> ValueError:
        return ValueError(f"{self.name}/file-unrecognized-param: {what}")

    @staticmethod
    def _check_inputs(top: int, dur: int) -> None:
        if top < 0 or dur < 0:
            raise ValueError(f"top and dur must be non-negative (top={top}, dur={dur})")

    def price_curve(self, top: int, duration: int, n_points: int = 200) -> pd.DataFrame:
        """Sample the decay curve from 0 to ``duration`` seconds.

        Returns:
            DataFrame with columns: elapsed, price, price_float
        """
        elapsed = np.unique(np.linspace(0, duration, n_points).astype(np.int64))
        prices = [self.price(top, int(t)) for t in elapsed]
        return pd.DataFrame(
            {
                "elapsed": elapsed,
                "price": prices,
                "price_float": [p / top if top else 0.0 for p in prices],
            }
        )


class LinearDecrease(PriceCalculator):
    """Price falls linearly to zero over ``tau`` seconds."""

    name = "LinearDecrease"

    def __init__(self, tau: int = 0) -> None:
        self.tau = tau

    def file(self, what: str, data: int) -> None:
        if what != "tau":
            raise self._unrecognized(what)
        if data < 0:
            raise ValueError("LinearDecrease/negative-tau")
        self.tau = data

    def price(self, top: int, dur: int) -> int:
        self._check_inputs(top, dur)
        if dur >= self.tau:
            return 0
        return rmul(top, (self.tau - dur) * RAY // self.tau)


class ExponentialDecrease(PriceCalculator):
    """Price is multiplied by ``cut`` (a ray) once per second."""

    name = "ExponentialDecrease"

    def __init__(self, cut: int = 0) -> None:
        self.cut = 0
        self.file("cut", cut)

    def _set_cut(self, data: int) -> None:
        if data > RAY:
            raise ValueError(f"{self.name}/cut-gt-RAY")
        if data < 0:
            raise ValueError(f"{self.name}/negative-cut")
        self.cut = data

    def file(self, what: str, data: int) -> None:
        if what != "cut":
            raise self._unrecognized(what)
        self._set_cut(data)

    def price(self, top: int, dur: int) -> int:
        self._check_inputs(top, dur)
        return rmul(top, rpow(self.cut, dur, RAY))


class StairstepExponentialDecrease(ExponentialDecrease):
    """Price is multiplied by ``cut`` once every ``step`` seconds."""

    name = "StairstepExponentialDecrease"

    def __init__(self, cut: int = 0, step: int = 0) -> None:
        super().__init__(cut)
        self.step = 0
        self.file("step", step)

    def file(self, what: str, data: int) -> None:
        if what == "cut":
            self._set_cut(data)
        elif what == "step":
            if data < 0:
                raise ValueError(f"{self.name}/negative-step")
            self.step = data
        else:
            raise self._unrecognized(what)

    def price(self, top: int, dur: int) -> int:
        self._check_inputs(top, dur)
        if self.step == 0:
            raise ValueError(f"{self.name}/zero-step")
        return rmul(top, rpow(self.cut, dur // self.step, RAY))


_CALCULATORS: dict[str, type[PriceCalculator]] = {
    "linear": LinearDecrease,
    "exponential": ExponentialDecrease,
    "stairstep": StairstepExponentialDecrease,
}


def create_calculator(kind: str, **params: int) -> PriceCalculator:
    """Build a calculator by kind and ``file`` each keyword parameter into it."""
    try:
        cls = _CALCULATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown calculator: {kind}") from None

    calculator = cls()
    for what, data in params.items():
        calculator.file(what, data)
    return calculator


def cut_from_percent(percent: str | float) -> int:
    """Per-step multiplier for a percentage decrease (``"1"`` -> 0.99 ray)."""
    decrease = parse_units(percent, 25)
    if decrease > RAY:
        raise ValueError(f"decrease above 100%: {percent}")
    return RAY - decrease
