import logging
from unittest.mock import MagicMock

import pytest

from deploy_emp import build_parser
from deployer.config import load_config

ACCOUNT = "0x1000000000000000000000000000000000000001"
COLLATERAL = "0x2000000000000000000000000000000000000002"
CREATOR = "0x3000000000000000000000000000000000000003"
TX_HASH = "0x" + "ab" * 32


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ['ETH_RPC_URL', 'MNEMONIC', 'EMP_CREATOR_ADDRESS', 'UMA_NETWORKS_DIR', 'DEBUG']:
        monkeypatch.delenv(var, raising=False)
    yield
    logging.getLogger('emp_deployer').handlers.clear()


@pytest.fixture
def base_args():
    return [
        "--gasprice", "5",
        "--priceFeedIdentifier", "ETH/USD",
        "--collateralAddress", COLLATERAL,
        "--expirationTimestamp", "1735689600",
        "--syntheticName", "ETH Dollar Dec 2024",
        "--syntheticSymbol", "ethUSD-DEC24",
        "--minSponsorTokens", "1.5",
    ]


@pytest.fixture
def make_config():
    def _make(argv):
        args, _ = build_parser().parse_known_args(argv)
        return load_config(args)
    return _make


class FakeChainClient:
    """Stands in for ChainClient without touching a node"""

    def __init__(self, url=None, mnemonic=None, account_index=0, decimals=6, accounts=(ACCOUNT,)):
        self.url = url
        self.mnemonic = mnemonic
        self.account_index = account_index
        self.decimals = decimals
        self.accounts = list(accounts)
        self.network_id = 1
        self.calls = []
        self.contracts = {}
        self.sent = []
        self.send_error = None
        self.simulated_address = "0x4000000000000000000000000000000000000004"

    def get_account(self):
        self.calls.append('get_account')
        if not self.accounts:
            from deployer.errors import AccountError
            raise AccountError("No accounts. Must provide mnemonic or node must have unlocked accounts.")
        return self.accounts[self.account_index]

    def get_network_id(self):
        self.calls.append('get_network_id')
        return self.network_id

    def get_token_decimals(self, token_address):
        self.calls.append('get_token_decimals')
        return self.decimals

    def contract(self, address, abi):
        contract = MagicMock()
        contract.events.CreatedExpiringMultiParty.return_value.process_receipt.return_value = []
        self.contracts[address] = contract
        return contract

    def call(self, function_call, tx_options):
        self.calls.append('call')
        return self.simulated_address

    def send(self, function_call, tx_options, wait=True):
        self.calls.append('send')
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(tx_options)
        return TX_HASH, None


@pytest.fixture
def fake_client():
    return FakeChainClient()
