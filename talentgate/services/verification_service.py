"""Talentgate — Verification Service.

Talent verification workflows on top of the database:
  - submit: validate account identifiers, store them, move to in_review
  - status: status info, checklist progress and review scores
  - review: admin decision, scores, status and platform access
  - pending: profiles waiting on a reviewer
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Union

from talentgate.database import queries
from talentgate.database.db import Database
from talentgate.database.models import TalentProfile, TalentVerification
from talentgate.roles import Role, has_permission
from talentgate.services.errors import NotFoundError, PermissionDeniedError, ValidationError
from talentgate.utils.logger import get_logger
from talentgate.verification import (
    DEFAULT_VERIFICATION_REQUIREMENTS,
    ChecklistItem,
    StatusInfo,
    VerificationDecision,
    VerificationProgress,
    VerificationRequirements,
    VerificationResult,
    VerificationScores,
    VerificationStatus,
    calculate_overall_score,
    calculate_verification_progress,
    extract_github_username,
    generate_verification_checklist,
    get_verification_status_info,
    is_valid_gitlab_username,
    is_valid_linkedin_url,
    meets_verification_requirements,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerificationSubmission:
    """What a talent sends in for verification. Omitted fields are kept."""

    portfolio_url: Optional[str] = None
    portfolio_projects: Optional[str] = None
    github_username: Optional[str] = None
    gitlab_username: Optional[str] = None
    code_repository_url: Optional[str] = None
    linkedin_url: Optional[str] = None


@dataclass(frozen=True)
class VerificationReview:
    """An admin's review of a talent's submission."""

    decision: str
    portfolio_score: Optional[float] = None
    code_sample_score: Optional[float] = None
    skill_tests_score: Optional[float] = None
    overall_score: Optional[float] = None
    rejection_reason: Optional[str] = None
    portfolio_notes: Optional[str] = None
    code_sample_notes: Optional[str] = None


@dataclass(frozen=True)
class ReviewOutcome:
    """Stored record plus the score check the decision was made against."""

    verification: TalentVerification
    requirements_check: VerificationResult


@dataclass(frozen=True)
class VerificationOverview:
    """Everything a talent's verification page shows."""

    verification_status: Union[VerificationStatus, str]
    platform_access: bool
    status_info: StatusInfo
    progress: VerificationProgress
    checklist: list[ChecklistItem]
    scores: Optional[VerificationScores]
    decision: Optional[VerificationDecision]
    rejection_reason: Optional[str]
    reviewed_at: Optional[str]


_EMPTY_PROGRESS = VerificationProgress(
    portfolio_reviewed=False,
    code_sample_reviewed=False,
    skill_tests_taken=False,
    linkedin_verified=False,
    identity_verified=False,
    completion_percentage=0,
)


async def _require_profile(db: Database, user_id: str) -> TalentProfile:
    profile = await queries.get_talent_profile_by_user(db, user_id)
    if profile is None:
        raise NotFoundError("Talent profile not found")
    return profile


def _validate_submission(submission: VerificationSubmission) -> list[str]:
    errors: list[str] = []
    if submission.github_username and extract_github_username(submission.github_username) is None:
        errors.append("Invalid GitHub username format")
    if submission.gitlab_username and not is_valid_gitlab_username(submission.gitlab_username):
        errors.append("Invalid GitLab username format")
    if submission.linkedin_url and not is_valid_linkedin_url(submission.linkedin_url):
        errors.append("Invalid LinkedIn URL format")
    return errors


async def submit_verification(
    db: Database, user_id: str, submission: VerificationSubmission,
) -> TalentVerification:
    """Record a talent's verification submission and queue it for review.

    A GitHub profile URL or @handle is stored as the bare username.

    Raises:
        NotFoundError: If the user has no talent profile.
        ValidationError: With every malformed identifier listed.
    """
    profile = await _require_profile(db, user_id)

    errors = _validate_submission(submission)
    if errors:
        logger.info("Rejected submission from %s: %s", user_id, "; ".join(errors))
        raise ValidationError("Invalid verification submission", errors)

    record = await queries.get_verification(db, profile.id) or TalentVerification(
        talent_profile_id=profile.id,
    )
    if submission.github_username:
        record.github_username = extract_github_username(submission.github_username)
    if submission.gitlab_username is not None:
        record.gitlab_username = submission.gitlab_username
    if submission.code_repository_url is not None:
        record.code_repository_url = submission.code_repository_url
    if submission.linkedin_url is not None:
        record.linkedin_url = submission.linkedin_url

    stored = await queries.record_submission(
        db,
        profile.id,
        submission.portfolio_url if submission.portfolio_url is not None else profile.portfolio_url,
        submission.portfolio_projects or profile.portfolio_projects,
        record,
    )
    logger.info("Verification submitted by %s — profile %d now in review", user_id, profile.id)
    return stored


async def get_verification_status(
    db: Database,
    user_id: str,
    requirements: VerificationRequirements = DEFAULT_VERIFICATION_REQUIREMENTS,
) -> VerificationOverview:
    """Assemble the verification overview for a talent.

    Raises:
        NotFoundError: If the user has no talent profile.
    """
    profile = await _require_profile(db, user_id)
    record = await queries.get_verification(db, profile.id)

    progress = (
        calculate_verification_progress(record, requirements)
        if record is not None else _EMPTY_PROGRESS
    )

    return VerificationOverview(
        verification_status=profile.verification_status,
        platform_access=profile.platform_access,
        status_info=get_verification_status_info(profile.verification_status),
        progress=progress,
        checklist=generate_verification_checklist(requirements),
        scores=record.scores if record else None,
        decision=record.verification_decision if record else None,
        rejection_reason=record.rejection_reason if record else None,
        reviewed_at=record.reviewed_at if record else None,
    )


def _parse_decision(raw: str) -> VerificationDecision:
    try:
        decision = VerificationDecision(raw)
    except ValueError:
        decision = None
    if decision not in (VerificationDecision.APPROVED, VerificationDecision.REJECTED):
        raise ValidationError("Invalid decision. Must be 'approved' or 'rejected'")
    return decision


async def review_verification(
    db: Database,
    reviewer_id: str,
    reviewer_role: Role,
    talent_profile_id: int,
    review: VerificationReview,
    requirements: VerificationRequirements = DEFAULT_VERIFICATION_REQUIREMENTS,
) -> ReviewOutcome:
    """Apply an admin's decision to a talent's verification.

    The reviewer's decision is authoritative. The score check against
    the minimums is returned and logged for reference; an approval that
    fails it is logged as a warning.

    Args:
        db: Active database instance.
        reviewer_id: The reviewing user's id.
        reviewer_role: The reviewing user's role.
        talent_profile_id: Profile under review.
        review: Decision, scores and notes.
        requirements: Requirements the score check is run with.

    Returns:
        ReviewOutcome with the stored record and the score check.

    Raises:
        PermissionDeniedError: Reviewer is not an admin.
        ValidationError: Decision is not 'approved' or 'rejected'.
        NotFoundError: Profile does not exist.
    """
    if not has_permission(reviewer_role, "review_verifications"):
        raise PermissionDeniedError("Forbidden - Admin access required")

    decision = _parse_decision(review.decision)

    profile = await queries.get_talent_profile(db, talent_profile_id)
    if profile is None:
        raise NotFoundError("Talent profile not found")

    scores = VerificationScores(
        portfolio_score=review.portfolio_score,
        code_sample_score=review.code_sample_score,
        skill_tests_score=review.skill_tests_score,
        overall_score=review.overall_score,
    )
    has_sub_scores = any(
        s is not None
        for s in (review.portfolio_score, review.code_sample_score, review.skill_tests_score)
    )
    if scores.overall_score is None and has_sub_scores:
        scores = replace(scores, overall_score=calculate_overall_score(scores))

    check = meets_verification_requirements(scores, requirements)
    approved = decision is VerificationDecision.APPROVED
    if approved and not check.approved:
        logger.warning(
            "Profile %d approved by %s despite: %s",
            talent_profile_id, reviewer_id, "; ".join(check.reasons),
        )

    existing = await queries.get_verification(db, talent_profile_id)
    record = existing or TalentVerification(talent_profile_id=talent_profile_id)
    record = replace(
        record,
        portfolio_score=scores.portfolio_score,
        code_sample_score=scores.code_sample_score,
        skill_tests_score=scores.skill_tests_score,
        overall_score=scores.overall_score,
        portfolio_notes=review.portfolio_notes,
        code_sample_notes=review.code_sample_notes,
        verification_decision=decision,
        reviewed_by=reviewer_id,
        reviewed_at=datetime.now().isoformat(timespec="seconds"),
        rejection_reason=None if approved else review.rejection_reason,
        portfolio_reviewed=True,
        code_sample_reviewed=True,
    )
    stored = await queries.upsert_verification(db, record)

    await queries.update_verification_status(
        db,
        talent_profile_id,
        VerificationStatus.VERIFIED if approved else VerificationStatus.REJECTED,
        platform_access=approved,
    )

    logger.info(
        "Profile %d %s by %s (overall=%s)",
        talent_profile_id, "verified" if approved else "rejected",
        reviewer_id, scores.overall_score,
    )
    return ReviewOutcome(verification=stored, requirements_check=check)


async def list_pending_verifications(db: Database) -> list[TalentProfile]:
    """Profiles waiting on a reviewer, oldest first."""
    return await queries.list_pending_verifications(db)
