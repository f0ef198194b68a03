"""
Configuration schema and validation for EMP deployments
"""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from eth_utils import is_address

from deployer.errors import ConfigError
from deployer.models.deployment import (
    DEFAULT_LIBRARY_ADDRESS,
    DEFAULT_LIVENESS,
    IDENTIFIER_WIDTH,
)

DEFAULT_URL = "http://localhost:8545"
DEFAULT_NETWORKS_DIR = "networks"
MIN_GAS_PRICE_GWEI = 1
MAX_GAS_PRICE_GWEI = 1000

REQUIRED_OPTIONS = [
    ('price_feed_identifier', 'priceFeedIdentifier'),
    ('collateral_address', 'collateralAddress'),
    ('expiration_timestamp', 'expirationTimestamp'),
    ('synthetic_name', 'syntheticName'),
    ('synthetic_symbol', 'syntheticSymbol'),
    ('min_sponsor_tokens', 'minSponsorTokens'),
]


@dataclass(frozen=True)
class DeploymentConfig:
    """Validated options for a single deployment"""
    gasprice: Decimal
    price_feed_identifier: str
    collateral_address: str
    expiration_timestamp: int
    synthetic_name: str
    synthetic_symbol: str
    min_sponsor_tokens: str
    url: str = DEFAULT_URL
    mnemonic: Optional[str] = None
    account_index: int = 0
    library_address: str = DEFAULT_LIBRARY_ADDRESS
    liveness: int = DEFAULT_LIVENESS
    simulate: bool = False
    wait_for_receipt: bool = True
    networks_dir: str = DEFAULT_NETWORKS_DIR
    creator_address: Optional[str] = None


def _is_non_negative_int(value: str) -> bool:
    value = str(value).strip()
    return value.isascii() and value.isdigit()


def _check_gasprice(value: Optional[str], errors: List[str]) -> Optional[Decimal]:
    if value is None or str(value).strip() == "":
        errors.append("--gasprice required (in GWEI)")
        return None
    try:
        gasprice = Decimal(str(value).strip())
    except InvalidOperation:
        errors.append("--gasprice must be a number")
        return None
    if not gasprice.is_finite():
        errors.append("--gasprice must be a number")
        return None
    if gasprice < MIN_GAS_PRICE_GWEI or gasprice > MAX_GAS_PRICE_GWEI:
        errors.append(f"--gasprice must be between {MIN_GAS_PRICE_GWEI} and {MAX_GAS_PRICE_GWEI} (GWEI)")
        return None
    return gasprice


def load_config(args) -> DeploymentConfig:
    """Build a DeploymentConfig from parsed command line options

    Every violation is collected so the user sees all of them at once.
    Nothing here touches the network.

    Raises:
        ConfigError: if any option is missing or malformed
    """
    errors = []

    for attr, flag in REQUIRED_OPTIONS:
        value = getattr(args, attr, None)
        if value is None or str(value).strip() == "":
            errors.append(f"--{flag} required")

    gasprice = _check_gasprice(getattr(args, 'gasprice', None), errors)

    identifier = getattr(args, 'price_feed_identifier', None)
    collateral_address = getattr(args, 'collateral_address', None)
    expiration_timestamp = getattr(args, 'expiration_timestamp', None)
    min_sponsor_tokens = getattr(args, 'min_sponsor_tokens', None)

    if identifier and len(identifier.encode('utf-8')) > IDENTIFIER_WIDTH:
        errors.append(f"--priceFeedIdentifier must be at most {IDENTIFIER_WIDTH} bytes")

    if collateral_address and not is_address(collateral_address):
        errors.append("--collateralAddress must be a hex address")

    if expiration_timestamp and not _is_non_negative_int(expiration_timestamp):
        errors.append("--expirationTimestamp must be a unix timestamp in seconds")

    if min_sponsor_tokens:
        try:
            amount = Decimal(str(min_sponsor_tokens).strip())
            if not amount.is_finite() or amount < 0:
                errors.append("--minSponsorTokens must be a non-negative number")
        except InvalidOperation:
            errors.append("--minSponsorTokens must be a non-negative number")

    liveness = getattr(args, 'liveness', None)
    if liveness and not _is_non_negative_int(liveness):
        errors.append("--liveness must be a whole number of seconds")

    account_index = getattr(args, 'account_index', None)
    if account_index is not None and not _is_non_negative_int(account_index):
        errors.append("--accountIndex must be a non-negative integer")

    creator_address = getattr(args, 'creator_address', None) or os.getenv('EMP_CREATOR_ADDRESS')
    if creator_address and not is_address(creator_address):
        errors.append("--creatorAddress must be a hex address")

    if errors:
        raise ConfigError(errors)

    return DeploymentConfig(
        gasprice=gasprice,
        price_feed_identifier=identifier,
        collateral_address=collateral_address,
        expiration_timestamp=int(expiration_timestamp),
        synthetic_name=getattr(args, 'synthetic_name'),
        synthetic_symbol=getattr(args, 'synthetic_symbol'),
        min_sponsor_tokens=str(min_sponsor_tokens).strip(),
        url=getattr(args, 'url', None) or os.getenv('ETH_RPC_URL', DEFAULT_URL),
        mnemonic=getattr(args, 'mnemonic', None) or os.getenv('MNEMONIC') or None,
        account_index=int(account_index) if account_index is not None else 0,
        library_address=getattr(args, 'library_address', None) or DEFAULT_LIBRARY_ADDRESS,
        liveness=int(liveness) if liveness else DEFAULT_LIVENESS,
        simulate=bool(getattr(args, 'simulate', False)),
        wait_for_receipt=getattr(args, 'wait_for_receipt', True),
        networks_dir=getattr(args, 'networks_dir', None) or os.getenv('UMA_NETWORKS_DIR', DEFAULT_NETWORKS_DIR),
        creator_address=creator_address or None,
    )
