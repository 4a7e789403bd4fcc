"""Talentgate — Admin CLI.

Operator commands over the talent database:
  - init-db: create the schema
  - tier-progress USER_ID: tier, counters and progress to the next tier
  - upgrade USER_ID: apply an eligible tier upgrade
  - pending: profiles waiting for verification review
  - tiers: profile count per tier
  - checklist: the verification checklist talents see

Usage:
    python -m talentgate.main tier-progress user-42
    python scripts/run.py pending
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace
from typing import Optional

from talentgate.config import AppConfig, load_config
from talentgate.database import queries
from talentgate.database.db import Database
from talentgate.services import (
    ServiceError,
    get_tier_progress,
    list_pending_verifications,
    upgrade_tier,
)
from talentgate.utils.logger import get_logger, set_console_level
from talentgate.verification import VerificationStatus, generate_verification_checklist

logger = get_logger(__name__)


def _bar(percent: float, width: int = 20) -> str:
    filled = int(percent / 100 * width)
    return "█" * filled + "░" * (width - filled)


async def _tier_progress(db: Database, user_id: str) -> None:
    status = await get_tier_progress(db, user_id)
    tier = status.current_tier
    stats = status.stats

    print(f"Tier:       {tier.display_name}")
    print(f"Picks:      {stats.active_picks}/{tier.max_concurrent_picks}")
    print(f"Projects:   {stats.completed_projects}")
    print(f"Success:    {stats.success_rate:.1f}%")
    print(f"Earnings:   ${stats.total_earnings:,.2f}")

    if status.progress is None:
        print("Progress:   top tier reached")
    else:
        p = status.progress
        print(f"Next tier:  {p.next_tier.value}")
        print(f"  projects  {_bar(p.projects_progress)} {p.projects_progress:.0f}%")
        print(f"  success   {_bar(p.success_rate_progress)} {p.success_rate_progress:.0f}%")
        print(f"  earnings  {_bar(p.earnings_progress)} {p.earnings_progress:.0f}%")
        print(f"  overall   {_bar(p.overall_progress)} {p.overall_progress:.0f}%")
    print(f"Can upgrade: {'yes' if status.can_upgrade else 'no'}")


async def _upgrade(db: Database, user_id: str) -> None:
    config = await upgrade_tier(db, user_id)
    print(f"Upgraded {user_id} to {config.display_name} tier")


async def _pending(db: Database) -> None:
    profiles = await list_pending_verifications(db)
    if not profiles:
        print("No pending verifications")
        return
    for profile in profiles:
        status = profile.verification_status
        if isinstance(status, VerificationStatus):
            status = status.value
        print(
            f"#{profile.id:<5} {profile.user_id:<24} "
            f"{status:<10} {profile.created_at or ''}"
        )
    print(f"{len(profiles)} pending")


async def _tiers(db: Database) -> None:
    for tier, count in (await queries.count_profiles_by_tier(db)).items():
        print(f"{tier:<8} {count}")


async def _run(args: argparse.Namespace, config: AppConfig) -> None:
    async with Database(config.database_path) as db:
        if args.command == "init-db":
            print(f"Database ready: {db.db_path}")
        elif args.command == "tier-progress":
            await _tier_progress(db, args.user_id)
        elif args.command == "upgrade":
            await _upgrade(db, args.user_id)
        elif args.command == "pending":
            await _pending(db)
        elif args.command == "tiers":
            await _tiers(db)


def _print_checklist(config: AppConfig, skill_tests_required: bool) -> None:
    requirements = config.verification.requirements
    if skill_tests_required:
        requirements = replace(requirements, skill_tests_required=True)
    for item in generate_verification_checklist(requirements):
        marker = "*" if item.required else " "
        print(f"[{marker}] {item.label}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="talentgate", description="Talentgate admin commands")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database schema")

    progress = sub.add_parser("tier-progress", help="Show a talent's tier progress")
    progress.add_argument("user_id")

    upgrade = sub.add_parser("upgrade", help="Apply an eligible tier upgrade")
    upgrade.add_argument("user_id")

    sub.add_parser("pending", help="List profiles awaiting verification review")
    sub.add_parser("tiers", help="Count talent profiles per tier")

    checklist = sub.add_parser("checklist", help="Print the verification checklist")
    checklist.add_argument(
        "--skill-tests-required",
        action="store_true",
        help="Treat skill tests as required",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    config = load_config()
    set_console_level(config.log_level)

    if args.command == "checklist":
        _print_checklist(config, args.skill_tests_required)
        return 0

    try:
        asyncio.run(_run(args, config))
    except ServiceError as e:
        logger.error("%s failed (%d): %s", args.command, e.status_code, e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
