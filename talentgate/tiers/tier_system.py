"""Talentgate — Tier System.

Tier membership, concurrent-pick ceilings and upgrade eligibility for
talents. Everything here is a pure function of its arguments; callers
load the performance counters and persist any tier change themselves.

Tier ladder (all thresholds inclusive, all three must be met):
  bronze → 3 picks, no minimums
  silver → 4 picks, 5 projects, 80% success, $5,000 earned
  gold   → 5 picks, 15 projects, 90% success, $15,000 earned
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TierLevel(str, Enum):
    """Talent service level. Declaration order is the rank order."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"

    @property
    def rank(self) -> int:
        """Position in the bronze < silver < gold ordering."""
        return _TIER_ORDER.index(self)


_TIER_ORDER: tuple[TierLevel, ...] = (TierLevel.BRONZE, TierLevel.SILVER, TierLevel.GOLD)


@dataclass(frozen=True)
class TierConfig:
    """Static configuration for one tier.

    Attributes:
        name: The tier this config describes.
        display_name: Human-readable tier name.
        max_concurrent_picks: Ceiling on simultaneously held picks.
        min_completed_projects: Projects needed to qualify.
        min_success_rate: Success percentage needed to qualify.
        min_total_earnings: Lifetime earnings needed to qualify.
        benefits: Marketing bullet points shown to the talent.
        color: Hex display color.
    """

    name: TierLevel
    display_name: str
    max_concurrent_picks: int
    min_completed_projects: int
    min_success_rate: float
    min_total_earnings: float
    benefits: tuple[str, ...]
    color: str


@dataclass(frozen=True)
class TierProgress:
    """Progress of a talent towards the next tier, each value 0-100."""

    next_tier: TierLevel
    projects_progress: float
    success_rate_progress: float
    earnings_progress: float
    overall_progress: float


# ═══════════════════════════════════════════════════════════
# Tier Definitions
# ═══════════════════════════════════════════════════════════

TIER_CONFIGS: dict[TierLevel, TierConfig] = {
    TierLevel.BRONZE: TierConfig(
        name=TierLevel.BRONZE,
        display_name="Bronze",
        max_concurrent_picks=3,
        min_completed_projects=0,
        min_success_rate=0,
        min_total_earnings=0,
        benefits=(
            "Access to basic projects",
            "Up to 3 concurrent picks",
            "Portfolio showcase",
            "Direct client communication after mutual interest",
        ),
        color="#CD7F32",
    ),
    TierLevel.SILVER: TierConfig(
        name=TierLevel.SILVER,
        display_name="Silver",
        max_concurrent_picks=4,
        min_completed_projects=5,
        min_success_rate=80,
        min_total_earnings=5000,
        benefits=(
            "Access to intermediate projects",
            "Up to 4 concurrent picks",
            "Priority in search results",
            "Enhanced portfolio showcase",
            "Direct client communication after mutual interest",
            "Featured talent badge",
        ),
        color="#C0C0C0",
    ),
    TierLevel.GOLD: TierConfig(
        name=TierLevel.GOLD,
        display_name="Gold",
        max_concurrent_picks=5,
        min_completed_projects=15,
        min_success_rate=90,
        min_total_earnings=15000,
        benefits=(
            "Access to premium projects",
            "Up to 5 concurrent picks",
            "Top priority in search results",
            "Premium portfolio showcase",
            "Direct client communication after mutual interest",
            "Gold talent badge",
            "Exclusive project invitations",
            "Reduced platform fees",
        ),
        color="#FFD700",
    ),
}


# ═══════════════════════════════════════════════════════════
# Lookups
# ═══════════════════════════════════════════════════════════


def get_tier_config(tier: TierLevel) -> TierConfig:
    """Return the static configuration for a tier."""
    return TIER_CONFIGS[TierLevel(tier)]


def get_max_concurrent_picks(tier: TierLevel) -> int:
    """Return how many picks a talent of this tier may hold at once."""
    return get_tier_config(tier).max_concurrent_picks


def can_pick_project(current_picks: int, tier: TierLevel) -> bool:
    """Whether one more pick fits under the tier's ceiling.

    At the ceiling no further picks are allowed.
    """
    return current_picks < get_max_concurrent_picks(tier)


def can_access_project(talent_tier: TierLevel, project_minimum_tier: TierLevel) -> bool:
    """Whether a talent's tier reaches a project's minimum tier."""
    return TierLevel(talent_tier).rank >= TierLevel(project_minimum_tier).rank


# ═══════════════════════════════════════════════════════════
# Eligibility & Progress
# ═══════════════════════════════════════════════════════════


def _meets_minimums(
    config: TierConfig,
    completed_projects: int,
    success_rate: float,
    total_earnings: float,
) -> bool:
    return (
        completed_projects >= config.min_completed_projects
        and success_rate >= config.min_success_rate
        and total_earnings >= config.min_total_earnings
    )


def calculate_eligible_tier(
    completed_projects: int,
    success_rate: float,
    total_earnings: float,
) -> TierLevel:
    """Find the highest tier whose every minimum is met.

    Tiers are tried from gold down. Partial credit is not awarded: one
    metric under the bar disqualifies the tier. Bronze has no minimums,
    so it is always the fallback.

    Args:
        completed_projects: Number of completed projects.
        success_rate: Success percentage, 0-100.
        total_earnings: Lifetime earnings.

    Returns:
        The best tier the talent qualifies for.
    """
    for tier in reversed(_TIER_ORDER):
        if _meets_minimums(TIER_CONFIGS[tier], completed_projects, success_rate, total_earnings):
            return tier
    return TierLevel.BRONZE


def get_next_tier_requirements(current_tier: TierLevel) -> Optional[TierConfig]:
    """Config of the tier above, or None when already at gold."""
    rank = TierLevel(current_tier).rank
    if rank + 1 >= len(_TIER_ORDER):
        return None
    return TIER_CONFIGS[_TIER_ORDER[rank + 1]]


def _component_progress(value: float, minimum: float) -> float:
    # A zero minimum is already satisfied.
    if minimum == 0:
        return 100.0
    return min(value / minimum * 100, 100.0)


def calculate_progress_to_next_tier(
    current_tier: TierLevel,
    completed_projects: int,
    success_rate: float,
    total_earnings: float,
) -> Optional[TierProgress]:
    """Measure how far a talent is from the next tier's minimums.

    Each component is the metric as a percentage of the next tier's
    minimum, capped at 100. The overall figure is the plain mean of the
    three components.

    Args:
        current_tier: The talent's persisted tier.
        completed_projects: Number of completed projects.
        success_rate: Success percentage, 0-100.
        total_earnings: Lifetime earnings.

    Returns:
        A TierProgress, or None when the talent is already at gold.
    """
    next_config = get_next_tier_requirements(current_tier)
    if next_config is None:
        return None

    projects = _component_progress(completed_projects, next_config.min_completed_projects)
    success = _component_progress(success_rate, next_config.min_success_rate)
    earnings = _component_progress(total_earnings, next_config.min_total_earnings)

    return TierProgress(
        next_tier=next_config.name,
        projects_progress=projects,
        success_rate_progress=success,
        earnings_progress=earnings,
        overall_progress=(projects + success + earnings) / 3,
    )


def should_upgrade_tier(
    current_tier: TierLevel,
    completed_projects: int,
    success_rate: float,
    total_earnings: float,
) -> bool:
    """Whether the metrics qualify for a tier above the current one.

    Only upward moves are reported. Regressed metrics never signal a
    demotion.
    """
    eligible = calculate_eligible_tier(completed_projects, success_rate, total_earnings)
    return eligible.rank > TierLevel(current_tier).rank
