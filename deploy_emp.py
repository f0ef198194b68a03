#!/usr/bin/env python3
"""
Expiring Multi-Party Deployment Script
Creates a new EMP through the ExpiringMultiPartyCreator factory.

Optional arguments:
  --url: node url, defaults to ETH_RPC_URL or http://localhost:8545
  --mnemonic: account mnemonic, defaults to MNEMONIC. Without one the node's unlocked accounts are used
  --accountIndex: which derived/unlocked account to use (default 0)
  --libraryAddress: post expiration financial product library address
  --liveness: liquidation and withdrawal liveness, should be > (expiry timestamp - deployment timestamp)
  --simulate: dry run the creation before sending it

Mandatory arguments:
  --gasprice: gas price to use in GWEI
  --priceFeedIdentifier: price identifier to use
  --collateralAddress: collateral token address
  --expirationTimestamp: timestamp that the contract will expire at
  --syntheticName: long name
  --syntheticSymbol: short name
  --minSponsorTokens: minimum sponsor position size

Usage:
  python deploy_emp.py --gasprice 50 --priceFeedIdentifier ETH/USD \\
      --collateralAddress 0x... --expirationTimestamp 1735689600 \\
      --syntheticName "ETH Dollar Dec 2024" --syntheticSymbol ethUSD-DEC24 \\
      --minSponsorTokens 100
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from deployer.config import load_config
from deployer.emp_deployer import EMPDeployer
from deployer.errors import ConfigError


def setup_logging(debug: bool = False) -> logging.Logger:
    """Setup logging"""
    logger = logging.getLogger('emp_deployer')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s | %(levelname)s | %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deploy an Expiring Multi-Party contract", allow_abbrev=False)
    parser.add_argument("--url", help="Node url (default ETH_RPC_URL or http://localhost:8545)")
    parser.add_argument("--mnemonic", help="Mnemonic of the deploying account (default MNEMONIC)")
    parser.add_argument("--accountIndex", dest="account_index", help="Index of the account to deploy from (default 0)")
    parser.add_argument("--gasprice", help="Gas price in GWEI, between 1 and 1000")
    parser.add_argument("--priceFeedIdentifier", dest="price_feed_identifier", help="Price identifier, e.g. ETH/USD")
    parser.add_argument("--collateralAddress", dest="collateral_address", help="Collateral token address")
    parser.add_argument("--expirationTimestamp", dest="expiration_timestamp", help="Expiry as a unix timestamp")
    parser.add_argument("--syntheticName", dest="synthetic_name", help="Synthetic token long name")
    parser.add_argument("--syntheticSymbol", dest="synthetic_symbol", help="Synthetic token symbol")
    parser.add_argument("--minSponsorTokens", dest="min_sponsor_tokens", help="Minimum sponsor position size")
    parser.add_argument("--libraryAddress", dest="library_address", help="Financial product library address")
    parser.add_argument("--liveness", help="Liquidation and withdrawal liveness in seconds (default ten years)")
    parser.add_argument("--simulate", action="store_true", help="Simulate the creation before sending it")
    parser.add_argument("--no-wait", dest="wait_for_receipt", action="store_false",
                        help="Return as soon as the transaction is sent")
    parser.add_argument("--creatorAddress", dest="creator_address",
                        help="ExpiringMultiPartyCreator address (default EMP_CREATOR_ADDRESS or networks file)")
    parser.add_argument("--networksDir", dest="networks_dir",
                        help="Directory of <networkId>.json address files (default UMA_NETWORKS_DIR or ./networks)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


async def run(argv: Optional[List[str]] = None, deployer_factory=EMPDeployer) -> int:
    """Parse, validate and deploy. Returns the process exit code."""
    load_dotenv()
    args, unknown = build_parser().parse_known_args(argv)
    logger = setup_logging(args.debug or os.getenv('DEBUG', 'false').lower() == 'true')
    if unknown:
        logger.warning(f"Ignoring unrecognized arguments: {' '.join(unknown)}")

    try:
        config = load_config(args)
    except ConfigError as e:
        for error in e.errors:
            print(error, file=sys.stderr)
        return 1

    logger.debug(f"Deploying with config: url={config.url}, gasprice={config.gasprice} GWEI")

    result = await deployer_factory(config).deploy()
    if not result.success:
        print(f"❌ {result.error}", file=sys.stderr)
        if result.tx_hash:
            print(f"Transaction: {result.tx_hash}", file=sys.stderr)
        return 1

    print(f"Deployed in transaction: {result.tx_hash}")
    if result.emp_address:
        print(f"EMP address: {result.emp_address}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return asyncio.run(run(argv))
    except KeyboardInterrupt:
        print("\n👋 Deployment cancelled by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
