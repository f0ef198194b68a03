"""
ExpiringMultiPartyCreator factory interface
"""

import logging
from typing import Dict, Optional, Tuple

from web3.logs import DISCARD

from deployer.models.deployment import EMPParams

CONTRACT_NAME = "ExpiringMultiPartyCreator"


class EMPCreator:
    """Calls createExpiringMultiParty on a deployed factory"""

    def __init__(self, client, address: str, abi):
        self.client = client
        self.address = address
        self.contract = client.contract(address, abi)
        self.logger = logging.getLogger('emp_deployer')

    def _create_call(self, params: EMPParams):
        return self.contract.functions.createExpiringMultiParty(params.to_contract_args())

    def simulate(self, params: EMPParams, tx_options: Dict) -> str:
        """Dry run the creation and return the expected EMP address"""
        try:
            return self.client.call(self._create_call(params), tx_options)
        except Exception as e:
            self.logger.error(f"Simulation failed: {e}")
            raise

    def _extract_emp_address(self, receipt) -> Optional[str]:
        """Read the new EMP address from the CreatedExpiringMultiParty event"""
        if receipt is None:
            return None
        events = self.contract.events.CreatedExpiringMultiParty().process_receipt(receipt, errors=DISCARD)
        for event in events:
            return event['args']['expiringMultiPartyAddress']
        return None

    def create(self, params: EMPParams, tx_options: Dict, wait: bool = True) -> Tuple[str, Optional[str]]:
        """Send the creation transaction, returning (tx_hash, emp_address)"""
        try:
            tx_hash, receipt = self.client.send(self._create_call(params), tx_options, wait=wait)
        except Exception as e:
            self.logger.error(f"Failed to create EMP: {e}")
            raise
        return tx_hash, self._extract_emp_address(receipt)
