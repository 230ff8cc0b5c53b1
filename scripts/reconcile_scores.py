#!/usr/bin/env python3
"""Reconcile cached vote scores with the vote ledger.

Runs one pass by default. With --loop it keeps running, sleeping
reconciliation.interval_seconds between passes, for use as a sidecar or
scheduled job.

Examples:
    python scripts/reconcile_scores.py
    python scripts/reconcile_scores.py --target-type post
    python scripts/reconcile_scores.py --target-type topic --target-id <uuid>
    python scripts/reconcile_scores.py --loop
"""

import argparse
import asyncio
import sys

import logfire

from tally.config import Settings
from tally.domain.error import DomainError
from tally.domain.model import ReconciliationReport
from tally.domain.service import ReconciliationService, parse_scope
from tally.domain.value import ReconciliationScope
from tally.util.di.container import create_container
from tally.util.logging import setup_logging
from tally.util.observability import configure_logfire


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--target-type", choices=["topic", "post"], default=None)
    parser.add_argument("--target-id", default=None, help="Requires --target-type")
    parser.add_argument(
        "--loop",
        action="store_true",
        help="Keep reconciling on an interval instead of running once",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between passes with --loop (default from settings)",
    )
    return parser.parse_args(argv)


def print_report(report: ReconciliationReport) -> None:
    print(
        f"Checked {report.targets_checked} targets, "
        f"corrected {report.targets_corrected}, "
        f"{len(report.errors)} errors"
    )
    for correction in report.corrections:
        print(
            f"  {correction.target_type.value} {correction.target_id}: "
            f"{correction.old_score} -> {correction.new_score} ({correction.delta:+d})"
        )
    for failure in report.errors:
        print(
            f"  FAILED {failure.target_type.value} {failure.target_id}: {failure.error}"
        )


async def run(scope: ReconciliationScope, loop: bool, interval: float) -> int:
    """Run reconciliation once, or forever with ``loop``.

    Returns:
        Exit code: 1 if the last pass reported errors, else 0
    """
    container = create_container(with_fastapi=False)
    try:
        while True:
            async with container() as request_container:
                service = await request_container.get(ReconciliationService)
                try:
                    report = await service.reconcile(scope)
                except DomainError as e:
                    # A missing single target or an unreachable store ends
                    # a one-off run; the loop keeps trying
                    logfire.error("Reconciliation pass failed", error=str(e))
                    if not loop:
                        print(f"Reconciliation failed: {e}", file=sys.stderr)
                        return 1
                else:
                    print_report(report)
                    if not loop:
                        return 1 if report.errors else 0

            await asyncio.sleep(interval)
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    try:
        scope = parse_scope(args.target_type, args.target_id)
    except DomainError as e:
        print(f"Invalid scope: {e}", file=sys.stderr)
        return 2

    interval = args.interval or settings.reconciliation.interval_seconds
    logfire.info(
        "Starting score reconciliation",
        target_type=args.target_type,
        target_id=args.target_id,
        loop=args.loop,
        interval_seconds=interval,
    )
    try:
        return asyncio.run(run(scope, args.loop, interval))
    except KeyboardInterrupt:
        logfire.info("Score reconciliation stopped")
        return 0


if __name__ == "__main__":
    sys.exit(main())
