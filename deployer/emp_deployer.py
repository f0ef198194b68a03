"""
Deploys an Expiring Multi-Party contract through the on-chain factory
"""

import logging
from typing import Callable, Optional

from deployer.config import DeploymentConfig
from deployer.models.deployment import (
    GAS_LIMIT,
    DeploymentResult,
    build_emp_params,
    gwei_to_wei,
)
from deployer.registry import ContractRegistry
from deployer.services.chain_client import ChainClient
from deployer.services.emp_creator import CONTRACT_NAME, EMPCreator


class EMPDeployer:
    """Runs the deployment steps in order for a validated config"""

    def __init__(self, config: DeploymentConfig,
                 client_factory: Callable[..., ChainClient] = ChainClient,
                 registry: Optional[ContractRegistry] = None):
        self.config = config
        self.client_factory = client_factory
        overrides = {CONTRACT_NAME: config.creator_address} if config.creator_address else {}
        self.registry = registry or ContractRegistry(config.networks_dir, overrides)
        self.logger = logging.getLogger('emp_deployer')

    def transaction_options(self, account: str) -> dict:
        """Legacy gas pricing with a fixed gas limit"""
        return {
            'from': account,
            'gas': GAS_LIMIT,
            'gasPrice': gwei_to_wei(self.config.gasprice),
        }

    async def deploy(self) -> DeploymentResult:
        """Deploy one EMP. Failures come back as an unsuccessful result."""
        config = self.config
        try:
            client = self.client_factory(config.url, config.mnemonic, config.account_index)

            account = client.get_account()
            network_id = client.get_network_id()
            self.logger.info(f"Using account {account} on network {network_id}")

            decimals = client.get_token_decimals(config.collateral_address)
            params = build_emp_params(config, decimals)
            self.logger.debug(f"EMP params: {params}")

            creator_address = self.registry.get_address(CONTRACT_NAME, network_id)
            creator = EMPCreator(client, creator_address, self.registry.get_abi(CONTRACT_NAME))
            print(f"🏭 Using ExpiringMultiPartyCreator: {creator_address}")

            tx_options = self.transaction_options(account)

            if config.simulate:
                print("🧪 Simulating Deployment...")
                expected = creator.simulate(params, tx_options)
                print(f"✅ Simulation successful. Expected Address: {expected}")

            print(f"🚀 Deploying {params.synthetic_name} ({params.synthetic_symbol})")
            tx_hash, emp_address = creator.create(params, tx_options, wait=config.wait_for_receipt)
            return DeploymentResult(success=True, tx_hash=tx_hash, emp_address=emp_address)

        except Exception as e:
            self.logger.error(f"Deployment failed: {e}")
            return DeploymentResult(
                success=False,
                tx_hash=getattr(e, 'tx_hash', None),
                error=str(e),
            )
