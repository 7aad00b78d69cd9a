"""Thin web3.py wrapper used by the ops tasks to read and write contracts."""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from stablecoin.data.contracts import ABIS

logger = logging.getLogger(__name__)


class ChainClient:
    """Contract access bound to one web3 connection and one sender.

    Parameters
    ----------
    w3 : Web3
        Connected web3 instance.
    account : LocalAccount | None
        Signing account; transactions are signed locally and sent raw.
    sender : str | None
        Unlocked account on the node (forks); used with ``transact``
        when no signing account is given.
    """

    def __init__(self, w3: Any, account: Any | None = None, sender: str | None = None) -> None:
        self._w3 = w3
        self._account = account
        self._sender = Web3.to_checksum_address(sender) if sender else None

    @property
    def w3(self) -> Any:
        return self._w3

    @property
    def address(self) -> str:
        """Address transactions are sent from."""
        if self._account is not None:
            return self._account.address
        if self._sender is not None:
            return self._sender
        raise RuntimeError("ChainClient has no signing account or sender")

    @property
    def chain_id(self) -> int:
        return self._w3.eth.chain_id

    @property
    def is_connected(self) -> bool:
        """Check if the Web3 provider is connected."""
        try:
            return bool(self._w3.is_connected())
        except Exception:
            return False

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def contract(self, name: str, address: str) -> Any:
        abi = ABIS.get(name)
        if abi is None:
            raise KeyError(f"Unknown contract: {name}")
        return self._w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def call(self, fn: Any) -> Any:
        """Run a view function."""
        return fn.call()

    def transact(
        self,
        fn: Any,
        gas_price: int | None = None,
        gas_limit: int | None = None,
        value: int = 0,
    ) -> str:
        """Send a contract function call and wait for it to be mined.

        Returns the transaction hash as a ``0x`` hex string.
        """
        params: dict[str, Any] = {"from": self.address, "value": value}
        if gas_price is not None:
            params["gasPrice"] = gas_price
        if gas_limit is not None:
            params["gas"] = gas_limit

        if self._account is not None:
            params["nonce"] = self._w3.eth.get_transaction_count(self._account.address)
            params["chainId"] = self.chain_id
            tx = fn.build_transaction(params)
            signed = self._account.sign_transaction(tx)
            raw_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            raw_hash = fn.transact(params)

        tx_hash = Web3.to_hex(raw_hash)
        logger.info("tx hash: %s", tx_hash)
        receipt = self._w3.eth.wait_for_transaction_receipt(raw_hash)
        if receipt["status"] != 1:
            raise RuntimeError(f"transaction reverted: {tx_hash}")
        return tx_hash
