"""Network settings, role names and other protocol constants."""

from dataclasses import dataclass

# Stablecoin symbol used as key in the network config
AUSD = "AUSD"


@dataclass(frozen=True)
class NetworkSettings:
    """RPC and signer settings for one named network."""

    name: str
    chain_id: int
    rpc_url: str | None  # default when the RPC env var is unset
    rpc_env: str | None
    private_key_env: str


NETWORKS: dict[str, NetworkSettings] = {
    "hardhat": NetworkSettings(
        name="hardhat",
        chain_id=31337,
        rpc_url="http://127.0.0.1:8545",
        rpc_env=None,
        private_key_env="LOCAL_PRIVATE_KEY_1",
    ),
    "testnet": NetworkSettings(
        name="testnet",
        chain_id=97,
        rpc_url="https://data-seed-prebsc-1-s1.binance.org:8545",
        rpc_env="BSC_TESTNET_RPC",
        private_key_env="BSC_TESTNET_PRIVATE_KEY",
    ),
    "mainnet": NetworkSettings(
        name="mainnet",
        chain_id=56,
        rpc_url=None,
        rpc_env="BSC_MAINNET_RPC",
        private_key_env="BSC_MAINNET_PRIVATE_KEY",
    ),
}

DEFAULT_NETWORK = "testnet"

# Tenderly forks: transactions are sent from an unlocked deployer account
FORK_URL_MARKER = "https://rpc.tenderly.co/fork/"
FORK_DEPLOYER = "0xC44f82b07Ab3E691F826951a6E335E1bC1bB0B51"

# Environment variables
CONFIG_DIR_ENV = "STABLECOIN_CONFIG_DIR"

# AccessControl role getters exposed by the contracts
STABILITY_FEE_COLLECTOR_ROLE = "STABILITY_FEE_COLLECTOR_ROLE"
MINTER_ROLE = "MINTER_ROLE"
WHITELISTED = "WHITELISTED"
