"""
Minimal contract ABIs used by the deployer
"""

# FixedPoint.Unsigned is a struct wrapping a single uint256
FIXED_POINT_UNSIGNED = {
    "components": [{"internalType": "uint256", "name": "rawValue", "type": "uint256"}],
    "internalType": "struct FixedPoint.Unsigned",
    "type": "tuple"
}


def _fixed_point(name):
    return {**FIXED_POINT_UNSIGNED, "name": name}


EXPIRING_MULTI_PARTY_CREATOR_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"internalType": "uint256", "name": "expirationTimestamp", "type": "uint256"},
                    {"internalType": "address", "name": "collateralAddress", "type": "address"},
                    {"internalType": "bytes32", "name": "priceFeedIdentifier", "type": "bytes32"},
                    {"internalType": "string", "name": "syntheticName", "type": "string"},
                    {"internalType": "string", "name": "syntheticSymbol", "type": "string"},
                    _fixed_point("collateralRequirement"),
                    _fixed_point("disputeBondPercentage"),
                    _fixed_point("sponsorDisputeRewardPercentage"),
                    _fixed_point("disputerDisputeRewardPercentage"),
                    _fixed_point("minSponsorTokens"),
                    {"internalType": "uint256", "name": "withdrawalLiveness", "type": "uint256"},
                    {"internalType": "uint256", "name": "liquidationLiveness", "type": "uint256"},
                    {"internalType": "address", "name": "financialProductLibraryAddress", "type": "address"}
                ],
                "internalType": "struct ExpiringMultiPartyCreator.Params",
                "name": "params",
                "type": "tuple"
            }
        ],
        "name": "createExpiringMultiParty",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "expiringMultiPartyAddress", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "deployerAddress", "type": "address"}
        ],
        "name": "CreatedExpiringMultiParty",
        "type": "event"
    }
]

IERC20_STANDARD_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]

ABIS = {
    "ExpiringMultiPartyCreator": EXPIRING_MULTI_PARTY_CREATOR_ABI,
    "IERC20Standard": IERC20_STANDARD_ABI,
}
