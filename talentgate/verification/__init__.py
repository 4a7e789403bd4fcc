"""Talentgate — Verification Package.

Talent verification rules:
  - scoring: weighted scores, approval, checklist progress, status info
  - identifiers: GitHub / GitLab / LinkedIn syntax checks
"""

from talentgate.verification.identifiers import (
    extract_github_username,
    is_valid_github_username,
    is_valid_gitlab_username,
    is_valid_linkedin_url,
)
from talentgate.verification.scoring import (
    DEFAULT_VERIFICATION_REQUIREMENTS,
    MINIMUM_SCORES,
    VERIFICATION_WEIGHTS,
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
    can_access_platform,
    generate_verification_checklist,
    get_verification_status_info,
    meets_verification_requirements,
)

__all__ = [
    "DEFAULT_VERIFICATION_REQUIREMENTS",
    "MINIMUM_SCORES",
    "VERIFICATION_WEIGHTS",
    "ChecklistItem",
    "StatusInfo",
    "VerificationDecision",
    "VerificationProgress",
    "VerificationRequirements",
    "VerificationResult",
    "VerificationScores",
    "VerificationStatus",
    "calculate_overall_score",
    "calculate_verification_progress",
    "can_access_platform",
    "extract_github_username",
    "generate_verification_checklist",
    "get_verification_status_info",
    "is_valid_github_username",
    "is_valid_gitlab_username",
    "is_valid_linkedin_url",
    "meets_verification_requirements",
]
