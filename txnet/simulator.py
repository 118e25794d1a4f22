#!/usr/bin/env python3
"""
Transaction simulator.

Issues random transactions between existing businesses against a running
txnet API, optionally repeating on an interval.

Usage:
    txnet-simulate NUM [MAX_AMOUNT] [--interval 5] [--host http://localhost:3001]
"""

import argparse
import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from .api.config import config
from .utils.constants import DEFAULT_MAX_AMOUNT, SIMULATOR_REQUEST_TIMEOUT
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Outcome of one batch of simulated transactions."""

    requested: int
    created: int = 0
    failed: int = 0


class TransactionSimulator:
    """Fire-and-forget transaction generator; failures are logged, never retried."""

    def __init__(
        self,
        base_url: str,
        num_transactions: int,
        max_amount: int = DEFAULT_MAX_AMOUNT,
        interval: float = 0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if num_transactions < 0:
            raise ValueError("num_transactions must not be negative")
        if max_amount < 1:
            raise ValueError("max_amount must be at least 1")

        self.base_url = base_url.rstrip("/")
        self.num_transactions = num_transactions
        self.max_amount = max_amount
        self.interval = interval
        self._client = client

    async def fetch_business_ids(self, client: httpx.AsyncClient) -> list[str]:
        try:
            response = await client.get(f"{self.base_url}/api/businesses")
            response.raise_for_status()
            return [b["business_id"] for b in response.json()["data"]]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Error during /api/businesses call: {e}")
            return []

    def random_transaction(self, business_ids: list[str]) -> dict:
        source, target = random.sample(business_ids, 2)
        return {
            "from": source,
            "to": target,
            "amount": random.randrange(self.max_amount),
            "timestamp": int(time.time() * 1000),
        }

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> bool:
        try:
            response = await client.post(f"{self.base_url}/api/transactions", json=payload)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to create transaction {payload['from']} -> {payload['to']}: {e}")
            return False

    async def run_round(self, client: httpx.AsyncClient) -> RoundResult:
        """Fetch businesses and post one batch of transactions concurrently."""
        result = RoundResult(requested=self.num_transactions)

        business_ids = await self.fetch_business_ids(client)
        if len(business_ids) < 2:
            logger.warning(
                f"Need at least two businesses to simulate transactions, found {len(business_ids)}"
            )
            result.failed = self.num_transactions
            return result

        payloads = [self.random_transaction(business_ids) for _ in range(self.num_transactions)]
        outcomes = await asyncio.gather(*(self._post(client, p) for p in payloads))

        result.created = sum(outcomes)
        result.failed = len(outcomes) - result.created
        logger.info(f"Created {result.created} of {result.requested} transactions")
        return result

    async def run(self, max_rounds: Optional[int] = None) -> list[RoundResult]:
        """
        Run rounds until stopped.

        With interval 0 a single round runs. Otherwise rounds repeat every
        `interval` seconds, up to `max_rounds` when given.
        """
        results = []
        client = self._client or httpx.AsyncClient(timeout=SIMULATOR_REQUEST_TIMEOUT)
        try:
            while True:
                results.append(await self.run_round(client))
                if self.interval <= 0 or (max_rounds and len(results) >= max_rounds):
                    break
                await asyncio.sleep(self.interval)
        finally:
            if self._client is None:
                await client.aclose()
        return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate random business transactions.")
    parser.add_argument("num_transactions", type=int, help="Transactions per round")
    parser.add_argument(
        "max_amount",
        type=int,
        nargs="?",
        default=DEFAULT_MAX_AMOUNT,
        help=f"Exclusive upper bound for amounts (default: {DEFAULT_MAX_AMOUNT})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=0,
        help="Seconds between rounds; 0 runs a single round (default: 0)",
    )
    parser.add_argument(
        "--host",
        default=config.SIMULATOR_HOST,
        help=f"API base URL (default: {config.SIMULATOR_HOST})",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(level=config.LOG_LEVEL, include_request_id=False)

    simulator = TransactionSimulator(
        base_url=args.host,
        num_transactions=args.num_transactions,
        max_amount=args.max_amount,
        interval=args.interval,
    )
    try:
        asyncio.run(simulator.run())
    except KeyboardInterrupt:
        logger.info("Simulator stopped")


if __name__ == "__main__":
    main()
