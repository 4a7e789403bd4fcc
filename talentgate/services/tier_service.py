"""Talentgate — Tier Service.

Tier workflows on top of the database: progress report, explicit
upgrade, and picking / releasing applications under the tier's
concurrent-pick ceiling.

Pipeline per call: load profile → apply tier rules → persist → log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from talentgate.database import queries
from talentgate.database.db import Database
from talentgate.database.models import Application, TalentProfile
from talentgate.services.errors import (
    NotEligibleError,
    NotFoundError,
    PermissionDeniedError,
    PickLimitError,
)
from talentgate.tiers import (
    TierConfig,
    TierProgress,
    calculate_eligible_tier,
    calculate_progress_to_next_tier,
    can_access_project,
    can_pick_project,
    get_max_concurrent_picks,
    get_tier_config,
    should_upgrade_tier,
)
from talentgate.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TalentStats:
    """Performance counters shown next to the tier."""

    active_picks: int
    completed_projects: int
    success_rate: float
    total_earnings: float


@dataclass(frozen=True)
class TierStatus:
    """A talent's tier, counters, progress and upgrade eligibility.

    Attributes:
        current_tier: Config of the persisted tier.
        stats: Counters the rules were evaluated against.
        progress: Progress to the next tier, None at gold.
        can_upgrade: Whether an upgrade would succeed now.
    """

    current_tier: TierConfig
    stats: TalentStats
    progress: Optional[TierProgress]
    can_upgrade: bool


async def _require_profile(db: Database, user_id: str) -> TalentProfile:
    profile = await queries.get_talent_profile_by_user(db, user_id)
    if profile is None:
        raise NotFoundError("Talent profile not found")
    return profile


def _stats(profile: TalentProfile) -> TalentStats:
    return TalentStats(
        active_picks=profile.active_picks,
        completed_projects=profile.completed_projects,
        success_rate=profile.success_rate,
        total_earnings=profile.total_earnings,
    )


async def get_tier_progress(db: Database, user_id: str) -> TierStatus:
    """Build the tier overview for a talent.

    Raises:
        NotFoundError: If the user has no talent profile.
    """
    profile = await _require_profile(db, user_id)
    metrics = (profile.completed_projects, profile.success_rate, profile.total_earnings)

    return TierStatus(
        current_tier=get_tier_config(profile.tier),
        stats=_stats(profile),
        progress=calculate_progress_to_next_tier(profile.tier, *metrics),
        can_upgrade=should_upgrade_tier(profile.tier, *metrics),
    )


async def upgrade_tier(db: Database, user_id: str) -> TierConfig:
    """Move a talent to the highest tier their metrics qualify for.

    Args:
        db: Active database instance.
        user_id: The talent's user id.

    Returns:
        Config of the new tier.

    Raises:
        NotFoundError: If the user has no talent profile.
        NotEligibleError: If no higher tier is reachable.
    """
    profile = await _require_profile(db, user_id)
    metrics = (profile.completed_projects, profile.success_rate, profile.total_earnings)

    if not should_upgrade_tier(profile.tier, *metrics):
        raise NotEligibleError("Not eligible for tier upgrade")

    new_tier = calculate_eligible_tier(*metrics)
    await queries.update_tier(db, profile.id, new_tier)

    config = get_tier_config(new_tier)
    logger.info(
        "Upgraded %s: %s → %s (projects=%d, success=%.1f, earnings=%.2f)",
        user_id, profile.tier.value, new_tier.value, *metrics,
    )
    return config


async def _require_owned_application(
    db: Database, user_id: str, application_id: int, action: str,
) -> Application:
    application = await queries.get_application(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    if application.talent_user_id != user_id:
        raise PermissionDeniedError(f"Unauthorized to {action} this application")
    return application


async def pick_application(db: Database, user_id: str, application_id: int) -> int:
    """Claim an application as one of the talent's concurrent picks.

    Checks, in order: profile exists, a pick slot is free, the
    application exists and belongs to the talent, it is not already
    picked, and the talent's tier reaches the project's minimum tier.
    The ceiling and the picked flag are checked again by the write
    itself, so simultaneous picks cannot exceed the ceiling.

    Args:
        db: Active database instance.
        user_id: The talent's user id.
        application_id: Application to pick.

    Returns:
        The talent's active pick count after the pick.

    Raises:
        NotFoundError: Missing profile or application.
        PickLimitError: The tier's pick ceiling is reached.
        PermissionDeniedError: Foreign application or tier too low.
        NotEligibleError: Application already picked.
    """
    profile = await _require_profile(db, user_id)

    if not can_pick_project(profile.active_picks, profile.tier):
        logger.info(
            "Pick refused for %s: %d/%d picks at %s",
            user_id, profile.active_picks,
            get_max_concurrent_picks(profile.tier), profile.tier.value,
        )
        raise PickLimitError(get_max_concurrent_picks(profile.tier), profile.tier.value)

    application = await _require_owned_application(db, user_id, application_id, "pick")
    if application.is_picked:
        raise NotEligibleError("Application already picked")

    project = application.project
    if project is not None and not can_access_project(profile.tier, project.minimum_tier):
        raise PermissionDeniedError(
            f"Project requires {get_tier_config(project.minimum_tier).display_name} tier or above"
        )

    max_picks = get_max_concurrent_picks(profile.tier)
    outcome = await queries.claim_application(db, application, profile.id, max_picks)
    if outcome.refusal == "limit":
        raise PickLimitError(max_picks, profile.tier.value)
    if not outcome.picked:
        raise NotEligibleError("Application already picked")

    logger.info(
        "%s picked application %d (%d/%d picks)",
        user_id, application_id, outcome.active_picks, max_picks,
    )
    return outcome.active_picks


async def unpick_application(db: Database, user_id: str, application_id: int) -> None:
    """Release a picked application and free its pick slot.

    Raises:
        NotFoundError: Missing profile or application.
        PermissionDeniedError: Foreign application.
        NotEligibleError: Application is not picked.
    """
    profile = await _require_profile(db, user_id)
    application = await _require_owned_application(db, user_id, application_id, "unpick")
    if not application.is_picked:
        raise NotEligibleError("Application is not picked")

    if not await queries.release_application(db, application, profile.id):
        raise NotEligibleError("Application is not picked")
    logger.info("%s released application %d", user_id, application_id)
