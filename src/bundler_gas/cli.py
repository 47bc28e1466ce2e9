#!/usr/bin/env python3
"""
Command-line interface for bundle gas price suggestions.
"""

import argparse
import asyncio
import json
import sys

from bundler_gas.config_loader import load_bundler_config
from bundler_gas.core.client import EthClient
from bundler_gas.core.errors import GasPricingError
from bundler_gas.core.gas.manager import GasPriceManager
from bundler_gas.core.userop import UserOperation
from bundler_gas.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Suggest gas prices for a bundle of user operations."
    )
    parser.add_argument(
        "--config", type=str, required=True, help="Path to the bundler YAML config"
    )
    parser.add_argument(
        "--ops",
        type=str,
        required=True,
        help="Path to a JSON array of user operations to bundle",
    )
    parser.add_argument(
        "--log-file", type=str, help="Also write logs to this file"
    )

    return parser.parse_args(argv)


def load_user_operations(path: str) -> list[UserOperation]:
    """Read a JSON array of user operations."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of user operations")
    return [UserOperation.from_dict(item) for item in data]


async def suggest(config: dict, batch: list[UserOperation]) -> dict[str, int]:
    """Verify the node's network and price the batch."""
    async with EthClient(config["rpc_endpoint"], timeout=config["rpc"]["timeout"]) as client:
        manager = GasPriceManager(client, fee_mode=config["gas"]["fee_mode"])
        await manager.verify_network(config["network"])
        prices = await manager.calculate_gas_prices(batch)
    return prices.to_dict()


async def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    if args.log_file:
        configure_logging(filename=args.log_file)

    try:
        config = load_bundler_config(args.config)
        configure_logging(
            config["logging"]["level"], args.log_file or config["logging"]["file"]
        )
        batch = load_user_operations(args.ops)
    except (OSError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        prices = await suggest(config, batch)
    except GasPricingError as e:
        logger.error(f"Gas pricing aborted: {e}")
        return 1

    print(json.dumps(prices))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
