"""
Chain client: web3 connection, signing account and transaction submission
"""

import logging
from typing import Dict, Optional

from eth_account import Account
from web3 import Web3

from deployer.abis import IERC20_STANDARD_ABI
from deployer.errors import AccountError, TransactionError

RECEIPT_TIMEOUT = 300


class ChainClient:
    """Thin wrapper around a Web3 instance

    With a mnemonic the signing key is derived locally and transactions are
    signed before being sent raw. Without one the node's own unlocked
    accounts are used.
    """

    def __init__(self, url: str, mnemonic: Optional[str] = None, account_index: int = 0, w3: Optional[Web3] = None):
        self.url = url
        self.account_index = account_index
        self.logger = logging.getLogger('emp_deployer')
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(url))

        self.local_account = None
        if mnemonic:
            self.local_account = self.derive_account(mnemonic, account_index)

    @staticmethod
    def derive_account(mnemonic: str, account_index: int = 0):
        """Derive the nth account from a BIP-39 mnemonic"""
        Account.enable_unaudited_hdwallet_features()
        return Account.from_mnemonic(mnemonic.strip(), account_path=f"m/44'/60'/0'/0/{account_index}")

    def get_account(self) -> str:
        """Return the address that will sign the deployment"""
        if self.local_account is not None:
            return self.local_account.address

        accounts = self.w3.eth.accounts
        if not accounts:
            raise AccountError("No accounts. Must provide mnemonic or node must have unlocked accounts.")
        if self.account_index >= len(accounts):
            raise AccountError(f"Node has {len(accounts)} accounts, index {self.account_index} is out of range")
        return accounts[self.account_index]

    def get_network_id(self) -> int:
        """Network id reported by net_version"""
        return int(self.w3.net.version)

    def get_token_decimals(self, token_address: str) -> int:
        """Read decimals() from an ERC20 token"""
        token = self.contract(token_address, IERC20_STANDARD_ABI)
        decimals = token.functions.decimals().call()
        self.logger.debug(f"Token {token_address} has {decimals} decimals")
        return int(decimals)

    def contract(self, address: str, abi):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def call(self, function_call, tx_options: Dict):
        """Execute a function call locally without sending a transaction"""
        return function_call.call(tx_options)

    def send(self, function_call, tx_options: Dict, wait: bool = True):
        """Submit a transaction and return (tx_hash, receipt)

        The receipt is None when wait is False.
        """
        if self.local_account is not None:
            tx = function_call.build_transaction({
                **tx_options,
                'nonce': self.w3.eth.get_transaction_count(self.local_account.address, 'pending'),
                'chainId': self.w3.eth.chain_id,
            })
            signed_tx = self.local_account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.rawTransaction)
        else:
            tx_hash = function_call.transact(tx_options)

        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"Transaction sent: {tx_hash_hex}")

        if not wait:
            return tx_hash_hex, None

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT)
        except Exception as e:
            self.logger.error(f"No receipt for {tx_hash_hex}: {e}")
            raise TransactionError(f"Transaction {tx_hash_hex} sent but no receipt: {e}", tx_hash=tx_hash_hex)

        if receipt['status'] != 1:
            raise TransactionError(f"Transaction {tx_hash_hex} reverted", tx_hash=tx_hash_hex)
        return tx_hash_hex, receipt
