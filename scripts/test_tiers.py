"""Talentgate — Tier Rules Test.

Covers pick ceilings, eligibility (all-or-nothing thresholds),
project access, next-tier lookups, progress and upgrade signals.

Run: python scripts/test_tiers.py
"""

from __future__ import annotations

import sys
from itertools import product
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from talentgate.tiers import (
    TIER_CONFIGS,
    TierLevel,
    calculate_eligible_tier,
    calculate_progress_to_next_tier,
    can_access_project,
    can_pick_project,
    get_max_concurrent_picks,
    get_next_tier_requirements,
    get_tier_config,
    should_upgrade_tier,
)
from talentgate.tiers.tier_system import _component_progress
from talentgate.utils.logger import get_logger

logger = get_logger(__name__)

_passed = 0
_failed = 0

BRONZE, SILVER, GOLD = TierLevel.BRONZE, TierLevel.SILVER, TierLevel.GOLD


def check(label: str, condition: bool) -> None:
    """Track a check result; a failed check stops the current scenario.

    Args:
        label: Test description.
        condition: Whether the test passed.
    """
    global _passed, _failed
    if condition:
        _passed += 1
        logger.info("    ✅ %s", label)
    else:
        _failed += 1
        logger.error("    ❌ FAILED: %s", label)
        raise AssertionError(label)


def close(a: float, b: float) -> bool:
    return abs(a - b) < 1e-9


def test_pick_ceilings() -> None:
    logger.info("═══ Pick ceilings ═══")
    check("bronze=3", get_max_concurrent_picks(BRONZE) == 3)
    check("silver=4", get_max_concurrent_picks(SILVER) == 4)
    check("gold=5", get_max_concurrent_picks(GOLD) == 5)

    for tier in TierLevel:
        limit = get_max_concurrent_picks(tier)
        check(f"{tier.value}: {limit - 1} picks → may pick", can_pick_project(limit - 1, tier))
        check(f"{tier.value}: {limit} picks → blocked", not can_pick_project(limit, tier))

    check("string tier accepted", can_pick_project(0, "silver"))


def test_thresholds_monotonic() -> None:
    logger.info("═══ Threshold ordering ═══")
    ladder = [get_tier_config(t) for t in (BRONZE, SILVER, GOLD)]
    for lower, upper in zip(ladder, ladder[1:]):
        pair = f"{lower.name.value}→{upper.name.value}"
        check(f"{pair} picks", lower.max_concurrent_picks <= upper.max_concurrent_picks)
        check(f"{pair} projects", lower.min_completed_projects <= upper.min_completed_projects)
        check(f"{pair} success", lower.min_success_rate <= upper.min_success_rate)
        check(f"{pair} earnings", lower.min_total_earnings <= upper.min_total_earnings)

    bronze = TIER_CONFIGS[BRONZE]
    check(
        "bronze has no minimums",
        (bronze.min_completed_projects, bronze.min_success_rate, bronze.min_total_earnings) == (0, 0, 0),
    )


def test_eligible_tier() -> None:
    logger.info("═══ Eligible tier ═══")
    check("(0, 0, 0) → bronze", calculate_eligible_tier(0, 0, 0) is BRONZE)
    check("(15, 90, 15000) → gold", calculate_eligible_tier(15, 90, 15000) is GOLD)
    check("(5, 80, 5000) → silver", calculate_eligible_tier(5, 80, 5000) is SILVER)
    check("(5, 79, 5000) → bronze", calculate_eligible_tier(5, 79, 5000) is BRONZE)
    check("(4, 100, 99999) → bronze", calculate_eligible_tier(4, 100, 99999) is BRONZE)
    check("(100, 89.9, 1e6) → silver", calculate_eligible_tier(100, 89.9, 1_000_000) is SILVER)
    check("(14, 95, 20000) → silver", calculate_eligible_tier(14, 95, 20000) is SILVER)


def test_config_round_trip() -> None:
    logger.info("═══ Config lookup round trip ═══")
    grid = product((0, 4, 5, 14, 15, 40), (0, 79.9, 80, 89, 90, 100), (0, 4999, 5000, 15000, 50000))
    mismatches = [
        metrics for metrics in grid
        if get_tier_config(calculate_eligible_tier(*metrics)).name != calculate_eligible_tier(*metrics)
    ]
    check("config name matches eligible tier on the whole grid", not mismatches)


def test_project_access() -> None:
    logger.info("═══ Project access ═══")
    check("bronze → bronze project", can_access_project(BRONZE, BRONZE))
    check("bronze ✗ silver project", not can_access_project(BRONZE, SILVER))
    check("silver ✗ gold project", not can_access_project(SILVER, GOLD))
    check("gold → silver project", can_access_project(GOLD, SILVER))
    check("gold → gold project", can_access_project(GOLD, GOLD))


def test_next_tier() -> None:
    logger.info("═══ Next tier requirements ═══")
    check("bronze → silver", get_next_tier_requirements(BRONZE).name is SILVER)
    check("silver → gold", get_next_tier_requirements(SILVER).name is GOLD)
    check("gold → None", get_next_tier_requirements(GOLD) is None)


def test_progress() -> None:
    logger.info("═══ Progress to next tier ═══")
    p = calculate_progress_to_next_tier(BRONZE, 2, 40, 1000)
    check("bronze targets silver", p.next_tier is SILVER)
    check("projects 2/5 = 40%", close(p.projects_progress, 40))
    check("success 40/80 = 50%", close(p.success_rate_progress, 50))
    check("earnings 1000/5000 = 20%", close(p.earnings_progress, 20))
    check("overall is plain mean", close(p.overall_progress, (40 + 50 + 20) / 3))

    p = calculate_progress_to_next_tier(SILVER, 30, 85, 15000)
    check("components cap at 100", close(p.projects_progress, 100) and close(p.earnings_progress, 100))
    check("success 85/90", close(p.success_rate_progress, 85 / 90 * 100))

    check("gold → None", calculate_progress_to_next_tier(GOLD, 0, 0, 0) is None)
    check("gold with huge metrics → None", calculate_progress_to_next_tier(GOLD, 99, 100, 1e6) is None)

    check("zero minimum counts as met", _component_progress(0, 0) == 100)
    check("zero minimum with a value counts as met", _component_progress(7, 0) == 100)


def test_should_upgrade() -> None:
    logger.info("═══ Upgrade signal ═══")
    check("bronze (5, 80, 5000) → upgrade", should_upgrade_tier(BRONZE, 5, 80, 5000))
    check("bronze (15, 90, 15000) → upgrade", should_upgrade_tier(BRONZE, 15, 90, 15000))
    check("silver (5, 80, 5000) → stay", not should_upgrade_tier(SILVER, 5, 80, 5000))
    check("gold (0, 0, 0) → no demotion signal", not should_upgrade_tier(GOLD, 0, 0, 0))
    check("silver regressed → no signal", not should_upgrade_tier(SILVER, 1, 10, 100))


SCENARIOS = [
    test_pick_ceilings,
    test_thresholds_monotonic,
    test_eligible_tier,
    test_config_round_trip,
    test_project_access,
    test_next_tier,
    test_progress,
    test_should_upgrade,
]


def main() -> None:
    """Run all tier scenarios."""
    logger.info("╔══════════════════════════════════════════════════════╗")
    logger.info("║  Talentgate — Tier Rules Tests                       ║")
    logger.info("╚══════════════════════════════════════════════════════╝")

    for scenario in SCENARIOS:
        try:
            scenario()
        except AssertionError:
            logger.error("  ↳ %s stopped at first failure", scenario.__name__)

    logger.info("═══════════════════════════════════════════")
    logger.info("  Results: %d passed, %d failed", _passed, _failed)
    logger.info("═══════════════════════════════════════════")

    if _failed > 0:
        logger.error("Some tests failed!")
        sys.exit(1)
    logger.info("🎉 All tier tests passed!")


if __name__ == "__main__":
    main()
