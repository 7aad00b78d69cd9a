"""Flash mint terms for the FlashMintModule (ERC-3156 lender).

The module mints unbacked stablecoin up to ``max`` (wad) for the duration
of one transaction and charges ``fee_rate`` (wad, 1e18 = 100%) on it.
"""

from dataclasses import dataclass

import pandas as pd
from web3 import Web3

from stablecoin.protocol.units import RAY, WAD

FLASH_LOAN_CALLBACK_SUCCESS = Web3.keccak(text="ERC3156FlashBorrower.onFlashLoan")
BOOKKEEPER_FLASH_LOAN_CALLBACK_SUCCESS = Web3.keccak(
    text="BookKeeperFlashBorrower.onBookKeeperFlashLoan"
)


@dataclass(frozen=True)
class FlashLoanSettlement:
    """Amounts moved by one flash loan.

    ``amount`` and ``fee`` are in the loan's unit (wad for ``flashLoan``,
    rad for ``bookKeeperFlashLoan``); ``amount_rad`` is the unbacked
    stablecoin minted in the BookKeeper and settled afterwards.
    """

    amount: int
    amount_rad: int
    fee: int
    repayment: int


@dataclass
class FlashMintModule:
    """Owner-set parameters of the flash mint module."""

    stablecoin: str
    max: int = 0
    fee_rate: int = 0

    def set_max(self, value: int) -> None:
        if value < 0:
            raise ValueError("FlashMintModule/negative-max")
        self.max = value

    def set_fee_rate(self, value: int) -> None:
        if value < 0:
            raise ValueError("FlashMintModule/negative-fee-rate")
        self.fee_rate = value

    def _supports(self, token: str) -> bool:
        return token.lower() == self.stablecoin.lower()

    def max_flash_loan(self, token: str) -> int:
        return self.max if self._supports(token) else 0

    def flash_fee(self, token: str, amount: int) -> int:
        if not self._supports(token):
            raise ValueError("FlashMintModule/token-unsupported")
        return amount * self.fee_rate // WAD

    def plan_flash_loan(self, token: str, amount: int) -> FlashLoanSettlement:
        """Settlement for ``flashLoan(receiver, token, amount, data)``."""
        fee = self.flash_fee(token, amount)
        if amount > self.max:
            raise ValueError("FlashMintModule/ceiling-exceeded")
        return FlashLoanSettlement(
            amount=amount,
            amount_rad=amount * RAY,
            fee=fee,
            repayment=amount + fee,
        )

    def plan_bookkeeper_flash_loan(self, amount_rad: int) -> FlashLoanSettlement:
        """Settlement for ``bookKeeperFlashLoan(receiver, amount, data)``, in rad."""
        if amount_rad > self.max * RAY:
            raise ValueError("FlashMintModule/ceiling-exceeded")
        fee = amount_rad * self.fee_rate // WAD
        return FlashLoanSettlement(
            amount=amount_rad,
            amount_rad=amount_rad,
            fee=fee,
            repayment=amount_rad + fee,
        )

    @staticmethod
    def verify_callback(returned: bytes, bookkeeper: bool = False) -> None:
        expected = (
            BOOKKEEPER_FLASH_LOAN_CALLBACK_SUCCESS if bookkeeper else FLASH_LOAN_CALLBACK_SUCCESS
        )
        if bytes(returned) != bytes(expected):
            raise ValueError("FlashMintModule/callback-failed")

    @staticmethod
    def check_repayment(settlement: FlashLoanSettlement, returned: int) -> None:
        """The borrower must hand back at least amount + fee."""
        if returned < settlement.repayment:
            raise ValueError("FlashMintModule/insufficient-fee")

    def fee_schedule(self, n_points: int = 11) -> pd.DataFrame:
        """Fee at evenly spaced loan sizes up to ``max``.

        Returns:
            DataFrame with columns: amount, fee (stablecoin units)
        """
        if n_points < 2:
            raise ValueError("n_points must be at least 2")
        amounts = [self.max * i // (n_points - 1) for i in range(n_points)]
        return pd.DataFrame(
            {
                "amount": [a / WAD for a in amounts],
                "fee": [a * self.fee_rate // WAD / WAD for a in amounts],
            }
        )
