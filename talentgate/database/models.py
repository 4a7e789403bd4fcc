"""Talentgate — Data Models.

Dataclasses for the persisted records the services read and write:
talent profiles, verification records, projects and applications.

Each dataclass includes:
  - to_db_dict(): converts to a dict suitable for SQLite insertion
  - from_db_row(row): classmethod to reconstruct from a DB row dict
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from talentgate.tiers import TierLevel
from talentgate.verification import (
    VerificationDecision,
    VerificationScores,
    VerificationStatus,
)



def _parse_status(raw: Optional[str]) -> Union[VerificationStatus, str]:
    """Map a stored status to the enum, keeping unrecognized values as-is."""
    try:
        return VerificationStatus(raw or "pending")
    except ValueError:
        return raw


def _status_value(status: Union[VerificationStatus, str]) -> str:
    return status.value if isinstance(status, VerificationStatus) else status


@dataclass
class TalentProfile:
    """A talent's performance counters, tier and verification gate.

    Attributes:
        user_id: Owning user's identifier.
        tier: Persisted tier; changes only through an explicit upgrade.
        active_picks: Picks currently held.
        completed_projects: Completed engagements.
        success_rate: Success percentage, 0-100.
        total_earnings: Lifetime earnings.
        verification_status: Current verification state; a stored value
            outside VerificationStatus is kept as the raw string.
        platform_access: Access flag maintained alongside the status.
        portfolio_url: Portfolio link submitted for review.
        portfolio_projects: Free-form portfolio project list.
        id: Database row id (None until inserted).
        created_at: Insertion timestamp from the database.
    """

    user_id: str
    tier: TierLevel = TierLevel.BRONZE
    active_picks: int = 0
    completed_projects: int = 0
    success_rate: float = 0.0
    total_earnings: float = 0.0
    verification_status: Union[VerificationStatus, str] = VerificationStatus.PENDING
    platform_access: bool = False
    portfolio_url: str = ""
    portfolio_projects: str = ""
    id: Optional[int] = None
    created_at: Optional[str] = None

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for SQLite insertion."""
        return {
            "user_id": self.user_id,
            "tier": TierLevel(self.tier).value,
            "active_picks": self.active_picks,
            "completed_projects": self.completed_projects,
            "success_rate": self.success_rate,
            "total_earnings": self.total_earnings,
            "verification_status": _status_value(self.verification_status),
            "platform_access": int(self.platform_access),
            "portfolio_url": self.portfolio_url,
            "portfolio_projects": self.portfolio_projects,
        }

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "TalentProfile":
        """Construct a TalentProfile from a database row dictionary."""
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            tier=TierLevel(row["tier"]),
            active_picks=row.get("active_picks", 0),
            completed_projects=row.get("completed_projects", 0),
            success_rate=row.get("success_rate", 0.0),
            total_earnings=row.get("total_earnings", 0.0),
            verification_status=_parse_status(row.get("verification_status")),
            platform_access=bool(row.get("platform_access", 0)),
            portfolio_url=row.get("portfolio_url") or "",
            portfolio_projects=row.get("portfolio_projects") or "",
            created_at=row.get("created_at"),
        )


@dataclass
class TalentVerification:
    """Submitted identifiers, review scores and checklist flags for a talent.

    The checklist attribute names match what
    calculate_verification_progress reads, so a record can be passed to
    it directly.
    """

    talent_profile_id: int
    github_username: Optional[str] = None
    gitlab_username: Optional[str] = None
    code_repository_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_score: Optional[float] = None
    code_sample_score: Optional[float] = None
    skill_tests_score: Optional[float] = None
    overall_score: Optional[float] = None
    portfolio_notes: Optional[str] = None
    code_sample_notes: Optional[str] = None
    verification_decision: VerificationDecision = VerificationDecision.PENDING
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    portfolio_reviewed: bool = False
    code_sample_reviewed: bool = False
    skill_tests_taken: list[str] = field(default_factory=list)
    linkedin_verified: bool = False
    identity_verified: bool = False
    id: Optional[int] = None

    @property
    def scores(self) -> VerificationScores:
        """The review scores in the shape the scoring rules take."""
        return VerificationScores(
            portfolio_score=self.portfolio_score,
            code_sample_score=self.code_sample_score,
            skill_tests_score=self.skill_tests_score,
            overall_score=self.overall_score,
        )

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for SQLite insertion.

        Returns:
            Dict with bools as int and skill_tests_taken as a JSON string.
        """
        return {
            "talent_profile_id": self.talent_profile_id,
            "github_username": self.github_username,
            "gitlab_username": self.gitlab_username,
            "code_repository_url": self.code_repository_url,
            "linkedin_url": self.linkedin_url,
            "portfolio_score": self.portfolio_score,
            "code_sample_score": self.code_sample_score,
            "skill_tests_score": self.skill_tests_score,
            "overall_score": self.overall_score,
            "portfolio_notes": self.portfolio_notes,
            "code_sample_notes": self.code_sample_notes,
            "verification_decision": VerificationDecision(self.verification_decision).value,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at,
            "rejection_reason": self.rejection_reason,
            "portfolio_reviewed": int(self.portfolio_reviewed),
            "code_sample_reviewed": int(self.code_sample_reviewed),
            "skill_tests_taken": json.dumps(self.skill_tests_taken, ensure_ascii=False),
            "linkedin_verified": int(self.linkedin_verified),
            "identity_verified": int(self.identity_verified),
        }

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "TalentVerification":
        """Construct a TalentVerification from a database row dictionary."""
        skill_tests = row.get("skill_tests_taken", "[]")
        if isinstance(skill_tests, str):
            try:
                skill_tests = json.loads(skill_tests)
            except json.JSONDecodeError:
                skill_tests = []

        return cls(
            id=row["id"],
            talent_profile_id=row["talent_profile_id"],
            github_username=row.get("github_username"),
            gitlab_username=row.get("gitlab_username"),
            code_repository_url=row.get("code_repository_url"),
            linkedin_url=row.get("linkedin_url"),
            portfolio_score=row.get("portfolio_score"),
            code_sample_score=row.get("code_sample_score"),
            skill_tests_score=row.get("skill_tests_score"),
            overall_score=row.get("overall_score"),
            portfolio_notes=row.get("portfolio_notes"),
            code_sample_notes=row.get("code_sample_notes"),
            verification_decision=VerificationDecision(row.get("verification_decision", "pending")),
            reviewed_by=row.get("reviewed_by"),
            reviewed_at=row.get("reviewed_at"),
            rejection_reason=row.get("rejection_reason"),
            portfolio_reviewed=bool(row.get("portfolio_reviewed", 0)),
            code_sample_reviewed=bool(row.get("code_sample_reviewed", 0)),
            skill_tests_taken=skill_tests if isinstance(skill_tests, list) else [],
            linkedin_verified=bool(row.get("linkedin_verified", 0)),
            identity_verified=bool(row.get("identity_verified", 0)),
        )


@dataclass
class Project:
    """A posted project, gated by a minimum talent tier."""

    title: str
    status: str = "open"
    minimum_tier: TierLevel = TierLevel.BRONZE
    id: Optional[int] = None

    def to_db_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status,
            "minimum_tier": TierLevel(self.minimum_tier).value,
        }

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Project":
        return cls(
            id=row["id"],
            title=row["title"],
            status=row.get("status", "open"),
            minimum_tier=TierLevel(row.get("minimum_tier", "bronze")),
        )


@dataclass
class Application:
    """A talent's application to a project.

    Attributes:
        project_id: Target project row id.
        talent_user_id: Applying talent's user id.
        status: 'pending' until picked, then 'accepted'.
        is_picked: Whether the application holds one of the talent's picks.
        picked_at: When it was picked.
        project: The joined project, when loaded with it.
    """

    project_id: int
    talent_user_id: str
    status: str = "pending"
    is_picked: bool = False
    picked_at: Optional[str] = None
    id: Optional[int] = None
    project: Optional[Project] = None

    def to_db_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "talent_user_id": self.talent_user_id,
            "status": self.status,
            "is_picked": int(self.is_picked),
            "picked_at": self.picked_at,
        }

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Application":
        return cls(
            id=row["id"],
            project_id=row["project_id"],
            talent_user_id=row["talent_user_id"],
            status=row.get("status", "pending"),
            is_picked=bool(row.get("is_picked", 0)),
            picked_at=row.get("picked_at"),
        )


@dataclass(frozen=True)
class PickOutcome:
    """Result of an attempt to claim a pick slot for an application.

    Attributes:
        picked: Whether the pick was recorded.
        active_picks: The talent's active picks after the attempt.
        refusal: "limit" or "already_picked" when not picked.
    """

    picked: bool
    active_picks: int
    refusal: Optional[str] = None
