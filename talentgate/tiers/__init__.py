"""Talentgate — Tiers Package.

Bronze/silver/gold tier rules: pick ceilings, project access,
eligibility and progress towards the next tier.
"""

from talentgate.tiers.tier_system import (
    TIER_CONFIGS,
    TierConfig,
    TierLevel,
    TierProgress,
    calculate_eligible_tier,
    calculate_progress_to_next_tier,
    can_access_project,
    can_pick_project,
    get_max_concurrent_picks,
    get_next_tier_requirements,
    get_tier_config,
    should_upgrade_tier,
)

__all__ = [
    "TIER_CONFIGS",
    "TierConfig",
    "TierLevel",
    "TierProgress",
    "calculate_eligible_tier",
    "calculate_progress_to_next_tier",
    "can_access_project",
    "can_pick_project",
    "get_max_concurrent_picks",
    "get_next_tier_requirements",
    "get_tier_config",
    "should_upgrade_tier",
]
