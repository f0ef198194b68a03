"""
Error types raised by the EMP deployer
"""

from typing import List, Optional


class DeployerError(Exception):
    """Base class for deployment failures"""


class ConfigError(DeployerError):
    """Raised when command line options are missing or malformed"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class AccountError(DeployerError):
    """Raised when no signing account is available"""


class RegistryError(DeployerError):
    """Raised when a contract address can't be resolved for the network"""


class TransactionError(DeployerError):
    """Raised when the creation transaction reverts"""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)
