"""Talentgate — Services Package.

Workflows that load talent records, apply the tier and verification
rules, and persist the results:
  - tier_service: progress, upgrade, pick / unpick
  - verification_service: submit, status, review, pending queue
  - errors: ServiceError hierarchy with HTTP-style status codes
"""

from talentgate.services.errors import (
    NotEligibleError,
    NotFoundError,
    PermissionDeniedError,
    PickLimitError,
    ServiceError,
    ValidationError,
)
from talentgate.services.tier_service import (
    TalentStats,
    TierStatus,
    get_tier_progress,
    pick_application,
    unpick_application,
    upgrade_tier,
)
from talentgate.services.verification_service import (
    ReviewOutcome,
    VerificationOverview,
    VerificationReview,
    VerificationSubmission,
    get_verification_status,
    list_pending_verifications,
    review_verification,
    submit_verification,
)

__all__ = [
    "NotEligibleError",
    "NotFoundError",
    "PermissionDeniedError",
    "PickLimitError",
    "ServiceError",
    "ValidationError",
    "TalentStats",
    "TierStatus",
    "get_tier_progress",
    "pick_application",
    "unpick_application",
    "upgrade_tier",
    "ReviewOutcome",
    "VerificationOverview",
    "VerificationReview",
    "VerificationSubmission",
    "get_verification_status",
    "list_pending_verifications",
    "review_verification",
    "submit_verification",
]
