"""Talentgate — Database Query Operations.

All async database read/write operations. Every function:
  - Uses parameterized queries (? placeholders, never f-strings for SQL)
  - Takes the Database instance as its first argument
  - Commits after writes
  - Returns model dataclasses (or None when a row is missing)
  - Logs operations at DEBUG level
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from talentgate.database.db import Database
from talentgate.database.models import (
    Application,
    PickOutcome,
    Project,
    TalentProfile,
    TalentVerification,
)
from talentgate.tiers import TierLevel
from talentgate.verification import VerificationStatus
from talentgate.utils.logger import get_logger

logger = get_logger(__name__)


def _row_to_dict(row: Any) -> dict[str, Any]:
    """Convert an aiosqlite Row to a plain dictionary."""
    return dict(row)


# ═══════════════════════════════════════════════════════════
# Talent Profile Operations
# ═══════════════════════════════════════════════════════════


async def insert_talent_profile(db: Database, profile: TalentProfile) -> int:
    """Insert a talent profile.

    Args:
        db: Active database instance.
        profile: Profile to store; its id is ignored.

    Returns:
        The new row id.
    """
    conn = await db.get_connection()
    d = profile.to_db_dict()
    cursor = await conn.execute(
        """
        INSERT INTO talent_profiles (
            user_id, tier, active_picks, completed_projects, success_rate,
            total_earnings, verification_status, platform_access,
            portfolio_url, portfolio_projects
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            d["user_id"], d["tier"], d["active_picks"], d["completed_projects"],
            d["success_rate"], d["total_earnings"], d["verification_status"],
            d["platform_access"], d["portfolio_url"], d["portfolio_projects"],
        ),
    )
    await conn.commit()
    logger.debug("Inserted talent profile %d for user %s", cursor.lastrowid, profile.user_id)
    return cursor.lastrowid


async def get_talent_profile(db: Database, profile_id: int) -> Optional[TalentProfile]:
    """Retrieve a talent profile by row id."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        "SELECT * FROM talent_profiles WHERE id = ?",
        (profile_id,),
    )
    row = await cursor.fetchone()
    logger.debug("get_talent_profile(%s) → %s", profile_id, "found" if row else "not found")
    return TalentProfile.from_db_row(_row_to_dict(row)) if row else None


async def get_talent_profile_by_user(db: Database, user_id: str) -> Optional[TalentProfile]:
    """Retrieve the talent profile owned by a user."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        "SELECT * FROM talent_profiles WHERE user_id = ?",
        (user_id,),
    )
    row = await cursor.fetchone()
    logger.debug("get_talent_profile_by_user(%s) → %s", user_id, "found" if row else "not found")
    return TalentProfile.from_db_row(_row_to_dict(row)) if row else None


async def update_tier(db: Database, profile_id: int, tier: TierLevel) -> None:
    """Persist a new tier for a talent profile."""
    conn = await db.get_connection()
    await conn.execute(
        "UPDATE talent_profiles SET tier = ? WHERE id = ?",
        (TierLevel(tier).value, profile_id),
    )
    await conn.commit()
    logger.debug("Updated profile %d tier → %s", profile_id, TierLevel(tier).value)


async def update_verification_status(
    db: Database,
    profile_id: int,
    status: VerificationStatus,
    platform_access: Optional[bool] = None,
) -> None:
    """Set the verification status, and the access flag when given.

    Args:
        db: Active database instance.
        profile_id: Talent profile row id.
        status: New verification status.
        platform_access: New access flag; None leaves it unchanged.
    """
    conn = await db.get_connection()
    status_value = VerificationStatus(status).value
    if platform_access is None:
        await conn.execute(
            "UPDATE talent_profiles SET verification_status = ? WHERE id = ?",
            (status_value, profile_id),
        )
    else:
        await conn.execute(
            """
            UPDATE talent_profiles SET verification_status = ?, platform_access = ?
            WHERE id = ?
            """,
            (status_value, int(platform_access), profile_id),
        )
    await conn.commit()
    logger.debug(
        "Updated profile %d verification → %s (access=%s)",
        profile_id, status_value, platform_access,
    )


async def list_pending_verifications(db: Database) -> list[TalentProfile]:
    """Profiles waiting on a reviewer (pending or in review), oldest first."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        """
        SELECT * FROM talent_profiles
        WHERE verification_status IN ('pending', 'in_review')
        ORDER BY created_at ASC, id ASC
        """
    )
    rows = await cursor.fetchall()
    logger.debug("list_pending_verifications → %d profiles", len(rows))
    return [TalentProfile.from_db_row(_row_to_dict(r)) for r in rows]


async def count_profiles_by_tier(db: Database) -> dict[str, int]:
    """Number of talent profiles per tier (every tier present, zero if empty)."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        "SELECT tier, COUNT(*) AS n FROM talent_profiles GROUP BY tier"
    )
    rows = await cursor.fetchall()
    counts = {tier.value: 0 for tier in TierLevel}
    for row in rows:
        counts[row["tier"]] = row["n"]
    return counts


# ═══════════════════════════════════════════════════════════
# Verification Operations
# ═══════════════════════════════════════════════════════════


async def get_verification(db: Database, profile_id: int) -> Optional[TalentVerification]:
    """Retrieve the verification record of a talent profile."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        "SELECT * FROM talent_verifications WHERE talent_profile_id = ?",
        (profile_id,),
    )
    row = await cursor.fetchone()
    logger.debug("get_verification(%s) → %s", profile_id, "found" if row else "not found")
    return TalentVerification.from_db_row(_row_to_dict(row)) if row else None


async def _write_verification(conn: Any, verification: TalentVerification) -> None:
    d = verification.to_db_dict()
    await conn.execute(
        """
        INSERT INTO talent_verifications (
            talent_profile_id, github_username, gitlab_username,
            code_repository_url, linkedin_url, portfolio_score,
            code_sample_score, skill_tests_score, overall_score,
            portfolio_notes, code_sample_notes, verification_decision,
            reviewed_by, reviewed_at, rejection_reason, portfolio_reviewed,
            code_sample_reviewed, skill_tests_taken, linkedin_verified,
            identity_verified
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(talent_profile_id) DO UPDATE SET
            github_username       = excluded.github_username,
            gitlab_username       = excluded.gitlab_username,
            code_repository_url   = excluded.code_repository_url,
            linkedin_url          = excluded.linkedin_url,
            portfolio_score       = excluded.portfolio_score,
            code_sample_score     = excluded.code_sample_score,
            skill_tests_score     = excluded.skill_tests_score,
            overall_score         = excluded.overall_score,
            portfolio_notes       = excluded.portfolio_notes,
            code_sample_notes     = excluded.code_sample_notes,
            verification_decision = excluded.verification_decision,
            reviewed_by           = excluded.reviewed_by,
            reviewed_at           = excluded.reviewed_at,
            rejection_reason      = excluded.rejection_reason,
            portfolio_reviewed    = excluded.portfolio_reviewed,
            code_sample_reviewed  = excluded.code_sample_reviewed,
            skill_tests_taken     = excluded.skill_tests_taken,
            linkedin_verified     = excluded.linkedin_verified,
            identity_verified     = excluded.identity_verified
        """,
        (
            d["talent_profile_id"], d["github_username"], d["gitlab_username"],
            d["code_repository_url"], d["linkedin_url"], d["portfolio_score"],
            d["code_sample_score"], d["skill_tests_score"], d["overall_score"],
            d["portfolio_notes"], d["code_sample_notes"], d["verification_decision"],
            d["reviewed_by"], d["reviewed_at"], d["rejection_reason"],
            d["portfolio_reviewed"], d["code_sample_reviewed"], d["skill_tests_taken"],
            d["linkedin_verified"], d["identity_verified"],
        ),
    )


async def _reread_verification(db: Database, verification: TalentVerification) -> TalentVerification:
    stored = await get_verification(db, verification.talent_profile_id)
    if stored is None:
        raise RuntimeError(
            f"Verification for profile {verification.talent_profile_id} vanished after upsert"
        )
    return stored


async def upsert_verification(db: Database, verification: TalentVerification) -> TalentVerification:
    """Insert or fully replace the verification record of a profile.

    Args:
        db: Active database instance.
        verification: Complete record; keyed by talent_profile_id.

    Returns:
        The stored record, re-read with its row id.
    """
    conn = await db.get_connection()
    async with db.write_lock:
        await _write_verification(conn, verification)
        await conn.commit()
    logger.debug("Upserted verification for profile %d", verification.talent_profile_id)
    return await _reread_verification(db, verification)


async def record_submission(
    db: Database,
    profile_id: int,
    portfolio_url: str,
    portfolio_projects: str,
    verification: TalentVerification,
) -> TalentVerification:
    """Store a verification submission in a single transaction.

    Writes the portfolio fields, the verification record and the
    in_review status together; on any failure none of them persist.

    Args:
        db: Active database instance.
        profile_id: Submitting talent's profile row id.
        portfolio_url: Portfolio link to store.
        portfolio_projects: Portfolio project list to store.
        verification: Complete verification record to upsert.

    Returns:
        The stored verification record.
    """
    conn = await db.get_connection()
    async with db.write_lock:
        try:
            await conn.execute(
                "UPDATE talent_profiles SET portfolio_url = ?, portfolio_projects = ? WHERE id = ?",
                (portfolio_url, portfolio_projects, profile_id),
            )
            await _write_verification(conn, verification)
            await conn.execute(
                "UPDATE talent_profiles SET verification_status = ? WHERE id = ?",
                (VerificationStatus.IN_REVIEW.value, profile_id),
            )
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    logger.debug("Recorded verification submission for profile %d", profile_id)
    return await _reread_verification(db, verification)


# ═══════════════════════════════════════════════════════════
# Project & Application Operations
# ═══════════════════════════════════════════════════════════


async def insert_project(db: Database, project: Project) -> int:
    """Insert a project and return its row id."""
    conn = await db.get_connection()
    d = project.to_db_dict()
    cursor = await conn.execute(
        "INSERT INTO projects (title, status, minimum_tier) VALUES (?, ?, ?)",
        (d["title"], d["status"], d["minimum_tier"]),
    )
    await conn.commit()
    logger.debug("Inserted project %d — %s", cursor.lastrowid, project.title[:40])
    return cursor.lastrowid


async def get_project(db: Database, project_id: int) -> Optional[Project]:
    conn = await db.get_connection()
    cursor = await conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
    row = await cursor.fetchone()
    return Project.from_db_row(_row_to_dict(row)) if row else None


async def insert_application(db: Database, application: Application) -> int:
    """Insert an application and return its row id."""
    conn = await db.get_connection()
    d = application.to_db_dict()
    cursor = await conn.execute(
        """
        INSERT INTO applications (project_id, talent_user_id, status, is_picked, picked_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (d["project_id"], d["talent_user_id"], d["status"], d["is_picked"], d["picked_at"]),
    )
    await conn.commit()
    logger.debug("Inserted application %d on project %d", cursor.lastrowid, application.project_id)
    return cursor.lastrowid


async def get_application(db: Database, application_id: int) -> Optional[Application]:
    """Retrieve an application together with its project."""
    conn = await db.get_connection()
    cursor = await conn.execute(
        "SELECT * FROM applications WHERE id = ?",
        (application_id,),
    )
    row = await cursor.fetchone()
    if row is None:
        logger.debug("get_application(%s) → not found", application_id)
        return None

    application = Application.from_db_row(_row_to_dict(row))
    application.project = await get_project(db, application.project_id)
    return application


async def _active_picks(conn: Any, profile_id: int) -> int:
    cursor = await conn.execute(
        "SELECT active_picks FROM talent_profiles WHERE id = ?",
        (profile_id,),
    )
    row = await cursor.fetchone()
    return row["active_picks"] if row else 0


async def claim_application(
    db: Database,
    application: Application,
    profile_id: int,
    max_picks: int,
) -> PickOutcome:
    """Pick an application in a single transaction.

    The slot and the application are claimed by conditional UPDATEs, so
    the ceiling and the picked flag are checked against the stored rows
    at write time, not against an earlier read. Picking marks the
    application accepted, takes one pick slot and moves the project in
    progress.

    Args:
        db: Active database instance.
        application: The application to pick.
        profile_id: The owning talent's profile row id.
        max_picks: The talent's tier ceiling.

    Returns:
        PickOutcome; on refusal nothing is written and refusal is
        "limit" (ceiling reached) or "already_picked".
    """
    conn = await db.get_connection()
    async with db.write_lock:
        try:
            cursor = await conn.execute(
                """
                UPDATE talent_profiles SET active_picks = active_picks + 1
                WHERE id = ? AND active_picks < ?
                  AND EXISTS (SELECT 1 FROM applications WHERE id = ? AND is_picked = 0)
                """,
                (profile_id, max_picks, application.id),
            )
            if cursor.rowcount == 0:
                await conn.rollback()
                active = await _active_picks(conn, profile_id)
                refusal = "limit" if active >= max_picks else "already_picked"
                logger.debug(
                    "Application %d not picked (profile %d): %s",
                    application.id, profile_id, refusal,
                )
                return PickOutcome(picked=False, active_picks=active, refusal=refusal)

            cursor = await conn.execute(
                """
                UPDATE applications SET is_picked = 1, picked_at = ?, status = 'accepted'
                WHERE id = ? AND is_picked = 0
                """,
                (datetime.now().isoformat(timespec="seconds"), application.id),
            )
            if cursor.rowcount == 0:
                raise RuntimeError(f"Application {application.id} was picked mid-transaction")
            await conn.execute(
                "UPDATE projects SET status = 'in_progress' WHERE id = ?",
                (application.project_id,),
            )
            active = await _active_picks(conn, profile_id)
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    logger.debug("Application %d picked (profile %d, %d active)", application.id, profile_id, active)
    return PickOutcome(picked=True, active_picks=active)


async def release_application(
    db: Database,
    application: Application,
    profile_id: int,
) -> bool:
    """Release a picked application in a single transaction.

    Reverses a pick: the application goes back to pending, the slot is
    freed (active picks never go below zero) and the project reopens.

    Returns:
        False if the application was not picked; nothing is written.
    """
    conn = await db.get_connection()
    async with db.write_lock:
        try:
            cursor = await conn.execute(
                """
                UPDATE applications SET is_picked = 0, picked_at = NULL, status = 'pending'
                WHERE id = ? AND is_picked = 1
                """,
                (application.id,),
            )
            if cursor.rowcount == 0:
                await conn.rollback()
                return False
            await conn.execute(
                """
                UPDATE talent_profiles SET active_picks = MAX(active_picks - 1, 0)
                WHERE id = ?
                """,
                (profile_id,),
            )
            await conn.execute(
                "UPDATE projects SET status = 'open' WHERE id = ?",
                (application.project_id,),
            )
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    logger.debug("Application %d released (profile %d)", application.id, profile_id)
    return True
