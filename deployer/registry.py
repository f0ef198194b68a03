"""
Contract registry: ABIs by name and deployed addresses by network id
"""

import json
import logging
import os
from typing import Dict, List, Optional

from eth_utils import to_checksum_address

from deployer.abis import ABIS
from deployer.errors import RegistryError

logger = logging.getLogger('emp_deployer')


class ContractRegistry:
    """Resolves contract interfaces and addresses for the active network

    Addresses are read from ``<networks_dir>/<network_id>.json`` files, each a
    list of ``{"contractName": ..., "address": ...}`` entries. Explicit
    overrides take precedence over the files.
    """

    def __init__(self, networks_dir: str = "networks", overrides: Optional[Dict[str, str]] = None):
        self.networks_dir = networks_dir
        self.overrides = dict(overrides or {})

    def get_abi(self, contract_name: str) -> List[Dict]:
        """Return the ABI for a known contract"""
        if contract_name not in ABIS:
            raise RegistryError(f"No ABI known for {contract_name}")
        return ABIS[contract_name]

    def _load_network(self, network_id: int) -> List[Dict]:
        path = os.path.join(self.networks_dir, f"{network_id}.json")
        if not os.path.exists(path):
            return []
        try:
            with open(path, 'r') as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RegistryError(f"Could not read network file {path}: {e}")
        if not isinstance(entries, list):
            raise RegistryError(f"Network file {path} must contain a list of contracts")
        return entries

    def get_address(self, contract_name: str, network_id: int) -> str:
        """Return the deployed address of a contract on a network"""
        if self.overrides.get(contract_name):
            address = self.overrides[contract_name]
            logger.debug(f"Using override address for {contract_name}: {address}")
            return to_checksum_address(address)

        for entry in self._load_network(network_id):
            if entry.get("contractName") == contract_name and entry.get("address"):
                return to_checksum_address(entry["address"])

        raise RegistryError(
            f"No address for {contract_name} on network {network_id} "
            f"(looked in {self.networks_dir}/{network_id}.json)"
        )
