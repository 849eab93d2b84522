#!/usr/bin/env python3
"""Simple CLI for THORChain asset and transaction lookups"""

import argparse
import asyncio
from typing import List, Optional

from thortx.config import settings
from thortx.core.assets import format_amount_with_symbol, is_dust, normalize_asset, to_display, to_wire
from thortx.core.errors import TransactionError
from thortx.core.tracking import StatusSummary
from thortx.logging_config import setup_logging
from thortx.services.transaction_service import TransactionService


def print_summary(summary: StatusSummary):
    """Pretty print a transaction status summary"""
    status_icon = {"done": "✅", "processing": "⏳", "pending": "🕐"}.get(summary.status.value, "❔")

    print(f"\n{status_icon} Transaction {summary.hash}")
    print("=" * 50)
    print(f"Status: {summary.status.value}")
    if summary.attempts > 1:
        print(f"Polls: {summary.attempts}")

    print("\nStages:")
    print("-" * 50)
    for stage in summary.stages:
        mark = "✔" if stage.completed else ("…" if stage.started else " ")
        line = f" [{mark}] {stage.name}"
        if stage.details:
            line += f"  ({stage.details})"
        print(line)

    info = summary.basic_info
    if info:
        print(f"\nChain: {info.chain}")
        print(f"From: {info.from_address}")
        if info.memo:
            print(f"Memo: {info.memo}")
        for coin in info.coins:
            asset = coin.get("asset", "")
            raw_amount = str(coin.get("amount", "0"))
            try:
                print(f"Amount: {format_amount_with_symbol(to_display(raw_amount, asset), asset)}")
            except TransactionError:
                print(f"Amount: {raw_amount} (unreadable) {asset}")

    if summary.error:
        print(f"\n⚠️  {summary.error}")


def cli_normalize(asset: str):
    normalized = normalize_asset(asset)
    if normalized.is_unknown:
        print(f"⚠️  Unrecognised asset: {asset}")
    print(f"Canonical: {normalized.canonical_id}")
    print(f"Chain:     {normalized.chain}")
    print(f"Symbol:    {normalized.symbol}")
    print(f"Kind:      {normalized.kind.value}")
    if normalized.contract_address:
        print(f"Contract:  {normalized.contract_address}")


def cli_to_wire(amount: str, asset: Optional[str] = None):
    try:
        wire = to_wire(amount, asset)
    except TransactionError as e:
        print(f"❌ Error: {e.message}")
        return
    print(wire)
    if is_dust(amount, asset):
        print("⚠️  Amount is below one wire unit")


def cli_to_display(wire: str, asset: Optional[str] = None):
    try:
        display = to_display(wire, asset)
    except TransactionError as e:
        print(f"❌ Error: {e.message}")
        return
    print(format_amount_with_symbol(display, asset) if asset else display)


async def cli_status(
    tx_hash: str,
    network: Optional[str] = None,
    poll: bool = False,
    attempts: Optional[int] = None,
    interval_ms: Optional[int] = None,
    service: Optional[TransactionService] = None,
):
    """CLI command to look up (or follow) a transaction"""
    service = service or TransactionService()
    if network:
        service.set_network(network)

    print(f"🔍 Looking up {tx_hash} on {service.coordinator.mode.value}...")
    try:
        if poll:
            summary = await service.poll_transaction_status(tx_hash, attempts, interval_ms)
        else:
            summary = await service.get_transaction_summary(tx_hash)
    except TransactionError as e:
        print(f"❌ Error: {e.message}")
        return

    print_summary(summary)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="THORChain transaction CLI")
    subparsers = parser.add_subparsers(dest="command")

    normalize_parser = subparsers.add_parser("normalize", help="Normalize an asset identifier")
    normalize_parser.add_argument("asset", help="Asset in native, secured or trade notation")

    wire_parser = subparsers.add_parser("to-wire", help="Convert a display amount to wire units")
    wire_parser.add_argument("amount", help="Display amount, e.g. 1.5")
    wire_parser.add_argument("asset", nargs="?", help="Asset (optional)")

    display_parser = subparsers.add_parser("to-display", help="Convert wire units to a display amount")
    display_parser.add_argument("wire", help="Wire amount, e.g. 150000000")
    display_parser.add_argument("asset", nargs="?", help="Asset (optional)")

    status_parser = subparsers.add_parser("status", help="Show transaction pipeline status")
    status_parser.add_argument("tx_hash", help="Transaction hash")
    status_parser.add_argument("--network", choices=["mainnet", "stagenet"], help=f"Network (default: {settings.network_mode})")
    status_parser.add_argument("--poll", action="store_true", help="Keep polling until done")
    status_parser.add_argument("--attempts", type=int, help="Maximum polls when --poll is set")
    status_parser.add_argument("--interval-ms", type=int, dest="interval_ms", help="Delay between polls")

    return parser


async def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    command = args.command.lower()

    if command == "normalize":
        cli_normalize(args.asset)

    elif command == "to-wire":
        cli_to_wire(args.amount, args.asset)

    elif command == "to-display":
        cli_to_display(args.wire, args.asset)

    elif command == "status":
        if args.attempts is not None and args.attempts <= 0:
            raise ValueError("Attempts must be positive")
        await cli_status(args.tx_hash, args.network, args.poll, args.attempts, args.interval_ms)

    else:
        print(f"❌ Unknown command: {command}")
        parser.print_help()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
