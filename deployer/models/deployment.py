"""
Deployment models and parameter assembly for Expiring Multi-Party contracts
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Dict, Optional, Union

from web3 import Web3

IDENTIFIER_WIDTH = 32
DEFAULT_LIVENESS = 315360000  # ten years in seconds
DEFAULT_LIBRARY_ADDRESS = "0xreplace"
GAS_LIMIT = 9000000

# Fixed-point ratios use 18 decimals on-chain
COLLATERAL_REQUIREMENT = Web3.to_wei(1, 'ether') + 1
DISPUTE_BOND_PERCENTAGE = Web3.to_wei('0.1', 'ether')
SPONSOR_DISPUTE_REWARD_PERCENTAGE = Web3.to_wei('0.99999', 'ether')
DISPUTER_DISPUTE_REWARD_PERCENTAGE = 0


@dataclass(frozen=True)
class EMPParams:
    """Constructor parameters passed to ExpiringMultiPartyCreator"""
    expiration_timestamp: int
    collateral_address: str
    price_feed_identifier: bytes  # 32 bytes, zero padded
    synthetic_name: str
    synthetic_symbol: str
    collateral_requirement: int
    dispute_bond_percentage: int
    sponsor_dispute_reward_percentage: int
    disputer_dispute_reward_percentage: int
    min_sponsor_tokens: int
    liquidation_liveness: int
    withdrawal_liveness: int
    financial_product_library_address: str

    def to_contract_args(self) -> Dict:
        """Shape the params as the Params struct expected by the factory"""
        return {
            "expirationTimestamp": self.expiration_timestamp,
            "collateralAddress": self.collateral_address,
            "priceFeedIdentifier": self.price_feed_identifier,
            "syntheticName": self.synthetic_name,
            "syntheticSymbol": self.synthetic_symbol,
            "collateralRequirement": {"rawValue": self.collateral_requirement},
            "disputeBondPercentage": {"rawValue": self.dispute_bond_percentage},
            "sponsorDisputeRewardPercentage": {"rawValue": self.sponsor_dispute_reward_percentage},
            "disputerDisputeRewardPercentage": {"rawValue": self.disputer_dispute_reward_percentage},
            "minSponsorTokens": {"rawValue": self.min_sponsor_tokens},
            "withdrawalLiveness": self.withdrawal_liveness,
            "liquidationLiveness": self.liquidation_liveness,
            "financialProductLibraryAddress": self.financial_product_library_address,
        }


@dataclass
class DeploymentResult:
    """Outcome of a single deployment run"""
    success: bool
    tx_hash: Optional[str] = None
    emp_address: Optional[str] = None
    error: Optional[str] = None


def pad_identifier(identifier: str) -> bytes:
    """UTF-8 encode a price identifier and right-pad it to bytes32"""
    raw = identifier.encode('utf-8')
    if len(raw) > IDENTIFIER_WIDTH:
        raise ValueError(f"Identifier '{identifier}' is longer than {IDENTIFIER_WIDTH} bytes")
    return raw.ljust(IDENTIFIER_WIDTH, b'\x00')


def parse_fixed(value: Union[str, int, Decimal], decimals: int) -> int:
    """Convert a human readable amount into an integer scaled by 10**decimals

    The conversion is exact: amounts with more fractional digits than the
    token supports are rejected instead of rounded.
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid decimal value: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid decimal value: {value!r}")
    if amount < 0:
        raise ValueError(f"Negative amounts are not supported: {value}")

    with localcontext() as ctx:
        ctx.prec = max(len(amount.as_tuple().digits) + decimals, 28)
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Fractional component of {value} exceeds {decimals} decimals")
    return int(scaled)


def gwei_to_wei(gasprice: Union[int, Decimal]) -> int:
    """Gas price in GWEI to wei"""
    return int(Web3.to_wei(Decimal(gasprice), 'gwei'))


def build_emp_params(config, decimals: int) -> EMPParams:
    """Assemble the full parameter struct from a validated config"""
    return EMPParams(
        expiration_timestamp=int(config.expiration_timestamp),
        collateral_address=Web3.to_checksum_address(config.collateral_address),
        price_feed_identifier=pad_identifier(config.price_feed_identifier),
        synthetic_name=config.synthetic_name,
        synthetic_symbol=config.synthetic_symbol,
        # 100% is safe here because each position is backed by one unit of
        # collateral before expiry, as defined by the financial product library
        collateral_requirement=COLLATERAL_REQUIREMENT,
        dispute_bond_percentage=DISPUTE_BOND_PERCENTAGE,
        sponsor_dispute_reward_percentage=SPONSOR_DISPUTE_REWARD_PERCENTAGE,
        disputer_dispute_reward_percentage=DISPUTER_DISPUTE_REWARD_PERCENTAGE,
        min_sponsor_tokens=parse_fixed(config.min_sponsor_tokens, decimals),
        liquidation_liveness=int(config.liveness),
        withdrawal_liveness=int(config.liveness),
        financial_product_library_address=config.library_address,
    )
