"""Talentgate — Verification Scoring.

Scoring and checklist logic for the talent verification workflow:
weighted overall score, approval decision against minimum scores,
checklist progress, and status display info.

All functions are pure. Input ranges are not validated here; callers
clamp scores before passing them in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class VerificationStatus(str, Enum):
    """Verification state stored on a talent profile."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    VERIFIED = "verified"
    REJECTED = "rejected"


class VerificationDecision(str, Enum):
    """Reviewer decision stored on a verification record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    NEEDS_REVISION = "needs_revision"


@dataclass(frozen=True)
class VerificationRequirements:
    """Which checklist items a talent must complete."""

    portfolio_required: bool = True
    code_repository_required: bool = True
    skill_tests_required: bool = False
    linkedin_required: bool = True
    identity_verification_required: bool = True


@dataclass(frozen=True)
class VerificationScores:
    """Reviewer sub-scores, each 0-100 when present."""

    portfolio_score: Optional[float] = None
    code_sample_score: Optional[float] = None
    skill_tests_score: Optional[float] = None
    overall_score: Optional[float] = None


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of checking scores against the minimums."""

    approved: bool
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class VerificationProgress:
    """Checklist flags plus the share of required items completed."""

    portfolio_reviewed: bool
    code_sample_reviewed: bool
    skill_tests_taken: bool
    linkedin_verified: bool
    identity_verified: bool
    completion_percentage: int


@dataclass(frozen=True)
class StatusInfo:
    """Display label, color and explanation for a verification status."""

    label: str
    color: str
    description: str


@dataclass(frozen=True)
class ChecklistItem:
    """One step of the verification checklist shown to a talent."""

    id: str
    label: str
    required: bool


# ── Configuration ────────────────────────────────────────
DEFAULT_VERIFICATION_REQUIREMENTS = VerificationRequirements()

# Identity is a boolean gate; its weight is declared but not used by
# calculate_overall_score.
VERIFICATION_WEIGHTS: dict[str, float] = {
    "portfolio": 0.35,
    "code_sample": 0.35,
    "skill_tests": 0.20,
    "identity": 0.10,
}

MINIMUM_SCORES: dict[str, float] = {
    "portfolio": 60,
    "code_sample": 60,
    "skill_tests": 70,
    "overall": 65,
}

_STATUS_INFO: dict[str, StatusInfo] = {
    "pending": StatusInfo(
        label="Pending Verification",
        color="yellow",
        description="Your profile is awaiting verification. Please complete all required steps.",
    ),
    "in_review": StatusInfo(
        label="Under Review",
        color="blue",
        description="Our team is reviewing your submission. This typically takes 1-2 business days.",
    ),
    "verified": StatusInfo(
        label="Verified",
        color="green",
        description="Your profile has been verified. You now have full access to the platform.",
    ),
    "rejected": StatusInfo(
        label="Verification Failed",
        color="red",
        description="Your verification was not approved. Please review the feedback and resubmit.",
    ),
}

_UNKNOWN_STATUS = StatusInfo(
    label="Unknown",
    color="gray",
    description="Verification status unknown.",
)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _fmt(value: float) -> str:
    """Render a score without a trailing .0 for whole numbers."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ═══════════════════════════════════════════════════════════
# Scoring
# ═══════════════════════════════════════════════════════════


def calculate_overall_score(scores: VerificationScores) -> float:
    """Weighted average of the sub-scores that are present.

    Weights are renormalized over the present scores only, so a lone
    portfolio score of 80 gives 80, not 80 * 0.35.

    Args:
        scores: Reviewer sub-scores.

    Returns:
        The overall score rounded to two decimals, or 0 with no sub-scores.
    """
    parts = (
        (scores.portfolio_score, VERIFICATION_WEIGHTS["portfolio"]),
        (scores.code_sample_score, VERIFICATION_WEIGHTS["code_sample"]),
        (scores.skill_tests_score, VERIFICATION_WEIGHTS["skill_tests"]),
    )
    weighted_sum = 0.0
    total_weight = 0.0
    for score, weight in parts:
        if score is None:
            continue
        weighted_sum += score * weight
        total_weight += weight

    if total_weight == 0:
        return 0
    return _round_half_up(weighted_sum / total_weight, 2)


def meets_verification_requirements(
    scores: VerificationScores,
    requirements: VerificationRequirements = DEFAULT_VERIFICATION_REQUIREMENTS,
) -> VerificationResult:
    """Check sub-scores and the overall score against the minimums.

    Rules:
      - Required portfolio / code sample: missing (or zero) means the
        review is not completed; below minimum is a shortfall.
      - Skill tests: only checked when required and a score exists.
      - Overall: the supplied overall score, else the computed one.

    Args:
        scores: Reviewer sub-scores.
        requirements: Which items are required.

    Returns:
        VerificationResult, approved when no reasons were collected.
    """
    reasons: list[str] = []

    if requirements.portfolio_required:
        if not scores.portfolio_score:
            reasons.append("Portfolio review not completed")
        elif scores.portfolio_score < MINIMUM_SCORES["portfolio"]:
            reasons.append(
                f"Portfolio score ({_fmt(scores.portfolio_score)}) below minimum "
                f"({_fmt(MINIMUM_SCORES['portfolio'])})"
            )

    if requirements.code_repository_required:
        if not scores.code_sample_score:
            reasons.append("Code sample review not completed")
        elif scores.code_sample_score < MINIMUM_SCORES["code_sample"]:
            reasons.append(
                f"Code sample score ({_fmt(scores.code_sample_score)}) below minimum "
                f"({_fmt(MINIMUM_SCORES['code_sample'])})"
            )

    if requirements.skill_tests_required and scores.skill_tests_score:
        if scores.skill_tests_score < MINIMUM_SCORES["skill_tests"]:
            reasons.append(
                f"Skill tests score ({_fmt(scores.skill_tests_score)}) below minimum "
                f"({_fmt(MINIMUM_SCORES['skill_tests'])})"
            )

    overall = scores.overall_score
    if overall is None:
        overall = calculate_overall_score(scores)
    if overall < MINIMUM_SCORES["overall"]:
        reasons.append(
            f"Overall score ({_fmt(overall)}) below minimum ({_fmt(MINIMUM_SCORES['overall'])})"
        )

    return VerificationResult(approved=not reasons, reasons=reasons)


# ═══════════════════════════════════════════════════════════
# Progress & Display
# ═══════════════════════════════════════════════════════════


def calculate_verification_progress(
    verification: Any,
    requirements: VerificationRequirements = DEFAULT_VERIFICATION_REQUIREMENTS,
) -> VerificationProgress:
    """Share of required checklist items the talent has completed.

    Args:
        verification: Any object exposing portfolio_reviewed,
            code_sample_reviewed, skill_tests_taken, linkedin_verified and
            identity_verified. skill_tests_taken counts as done only when it
            is a non-empty list of taken tests.
        requirements: Which items count towards the total.

    Returns:
        VerificationProgress with the flags and a rounded percentage
        (0 when nothing is required).
    """
    skill_tests = getattr(verification, "skill_tests_taken", None)
    skill_tests_done = isinstance(skill_tests, (list, tuple)) and len(skill_tests) > 0

    items = (
        (requirements.portfolio_required, bool(verification.portfolio_reviewed)),
        (requirements.code_repository_required, bool(verification.code_sample_reviewed)),
        (requirements.skill_tests_required, skill_tests_done),
        (requirements.linkedin_required, bool(verification.linkedin_verified)),
        (requirements.identity_verification_required, bool(verification.identity_verified)),
    )
    total = sum(1 for required, _ in items if required)
    completed = sum(1 for required, done in items if required and done)
    percentage = int(_round_half_up(completed / total * 100)) if total else 0

    return VerificationProgress(
        portfolio_reviewed=bool(verification.portfolio_reviewed),
        code_sample_reviewed=bool(verification.code_sample_reviewed),
        skill_tests_taken=skill_tests_done,
        linkedin_verified=bool(verification.linkedin_verified),
        identity_verified=bool(verification.identity_verified),
        completion_percentage=percentage,
    )


def can_access_platform(verification_status: VerificationStatus | str, platform_access: bool) -> bool:
    """Both the verified status and the access flag must be set."""
    return _status_value(verification_status) == VerificationStatus.VERIFIED.value and platform_access is True


def _status_value(status: Any) -> Any:
    return status.value if isinstance(status, Enum) else status


def get_verification_status_info(status: VerificationStatus | str) -> StatusInfo:
    """Display info for a status; unrecognized values get the "Unknown" entry."""
    return _STATUS_INFO.get(_status_value(status), _UNKNOWN_STATUS)


def generate_verification_checklist(
    requirements: VerificationRequirements = DEFAULT_VERIFICATION_REQUIREMENTS,
) -> list[ChecklistItem]:
    """Build the ordered checklist a talent works through.

    The skill-tests step is always listed; when it is not required its
    label marks it optional.
    """
    checklist: list[ChecklistItem] = []

    if requirements.portfolio_required:
        checklist.append(ChecklistItem("portfolio", "Submit portfolio for review", True))

    if requirements.code_repository_required:
        checklist.append(ChecklistItem(
            "code_repository",
            "Connect GitHub/GitLab account and submit code samples",
            True,
        ))

    if requirements.skill_tests_required:
        checklist.append(ChecklistItem("skill_tests", "Complete skill verification tests", True))
    else:
        checklist.append(ChecklistItem(
            "skill_tests",
            "Complete skill verification tests (optional, boosts credibility)",
            False,
        ))

    if requirements.linkedin_required:
        checklist.append(ChecklistItem("linkedin", "Verify LinkedIn profile", True))

    if requirements.identity_verification_required:
        checklist.append(ChecklistItem("identity", "Complete identity verification", True))

    return checklist
