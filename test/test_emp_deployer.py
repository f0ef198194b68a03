import asyncio

import pytest

from conftest import ACCOUNT, COLLATERAL, CREATOR, TX_HASH, FakeChainClient
from deployer.emp_deployer import EMPDeployer
from deployer.errors import TransactionError
from deployer.registry import ContractRegistry


def _deploy(config, client, registry=None):
    deployer = EMPDeployer(config, client_factory=lambda *args: client, registry=registry)
    return asyncio.run(deployer.deploy())


def _created_with(client):
    contract = client.contracts[CREATOR]
    return contract.functions.createExpiringMultiParty.call_args[0][0]


@pytest.fixture
def config(base_args, make_config):
    return make_config(base_args + ["--creatorAddress", CREATOR])


def test_successful_deployment(config, fake_client):
    result = _deploy(config, fake_client)

    assert result.success
    assert result.tx_hash == TX_HASH
    assert result.error is None
    assert fake_client.calls == ['get_account', 'get_network_id', 'get_token_decimals', 'send']


def test_transaction_options(config, fake_client):
    _deploy(config, fake_client)

    assert fake_client.sent == [{
        'from': ACCOUNT,
        'gas': 9000000,
        'gasPrice': 5000000000,
    }]


def test_submitted_params(config, fake_client):
    _deploy(config, fake_client)
    params = _created_with(fake_client)

    assert params["minSponsorTokens"] == {"rawValue": 1500000}
    assert params["priceFeedIdentifier"] == b"ETH/USD" + b"\x00" * 25
    assert params["liquidationLiveness"] == 315360000
    assert params["withdrawalLiveness"] == 315360000
    assert params["financialProductLibraryAddress"] == "0xreplace"
    assert params["collateralAddress"] == COLLATERAL


def test_client_built_from_config(base_args, make_config):
    config = make_config(base_args + ["--creatorAddress", CREATOR, "--url", "http://node:8545", "--accountIndex", "0"])
    seen = []

    def factory(url, mnemonic, account_index):
        seen.append((url, mnemonic, account_index))
        return FakeChainClient(url, mnemonic, account_index)

    asyncio.run(EMPDeployer(config, client_factory=factory).deploy())
    assert seen == [("http://node:8545", None, 0)]


def test_simulation_runs_before_send(base_args, make_config, fake_client):
    config = make_config(base_args + ["--creatorAddress", CREATOR, "--simulate"])
    result = _deploy(config, fake_client)

    assert result.success
    assert fake_client.calls.index('call') < fake_client.calls.index('send')


def test_no_simulation_by_default(config, fake_client):
    _deploy(config, fake_client)
    assert 'call' not in fake_client.calls


def test_no_accounts_returns_failure(config):
    client = FakeChainClient(accounts=())
    result = _deploy(config, client)

    assert not result.success
    assert "No accounts" in result.error
    assert 'send' not in client.calls


def test_transaction_error_returns_failure(config, fake_client):
    fake_client.send_error = TransactionError("Transaction 0xdead reverted", tx_hash="0xdead")
    result = _deploy(config, fake_client)

    assert not result.success
    assert result.tx_hash == "0xdead"
    assert "reverted" in result.error


def test_unknown_network_returns_failure(base_args, make_config, fake_client, tmp_path):
    config = make_config(base_args + ["--networksDir", str(tmp_path)])
    result = _deploy(config, fake_client)

    assert not result.success
    assert "ExpiringMultiPartyCreator" in result.error
    assert 'send' not in fake_client.calls


def test_registry_network_file(base_args, make_config, fake_client, tmp_path):
    (tmp_path / "1.json").write_text(
        '[{"contractName": "ExpiringMultiPartyCreator", "address": "%s"}]' % CREATOR
    )
    config = make_config(base_args)
    result = _deploy(config, fake_client, registry=ContractRegistry(str(tmp_path)))

    assert result.success
    assert CREATOR in fake_client.contracts


def test_precision_error_is_reported(base_args, make_config):
    argv = list(base_args) + ["--creatorAddress", CREATOR]
    argv[argv.index("--minSponsorTokens") + 1] = "0.0000001"
    client = FakeChainClient(decimals=6)
    result = _deploy(make_config(argv), client)

    assert not result.success
    assert "exceeds 6 decimals" in result.error
    assert 'send' not in client.calls
