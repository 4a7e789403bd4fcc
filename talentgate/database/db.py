"""Talentgate — SQLite Connection Manager.

Provides async SQLite database connection management using aiosqlite.
The Database instance is created by the caller at startup, passed to
every query function, and closed at shutdown.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiosqlite

from talentgate.utils.logger import get_logger

logger = get_logger(__name__)

# ── Schema Definitions ────────────────────────────────────
SCHEMA_SQL = """
-- ═══ Talent Profiles Table ═══
-- Performance counters, tier and verification gate per talent.
CREATE TABLE IF NOT EXISTS talent_profiles (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id             TEXT    UNIQUE NOT NULL,
    tier                TEXT    NOT NULL DEFAULT 'bronze',
    active_picks        INTEGER NOT NULL DEFAULT 0,
    completed_projects  INTEGER NOT NULL DEFAULT 0,
    success_rate        REAL    NOT NULL DEFAULT 0.0,
    total_earnings      REAL    NOT NULL DEFAULT 0.0,
    verification_status TEXT    NOT NULL DEFAULT 'pending',
    platform_access     INTEGER NOT NULL DEFAULT 0,
    portfolio_url       TEXT    DEFAULT '',
    portfolio_projects  TEXT    DEFAULT '',
    created_at          DATETIME DEFAULT (datetime('now', 'localtime'))
);

-- ═══ Talent Verifications Table ═══
-- One verification record per talent profile.
CREATE TABLE IF NOT EXISTS talent_verifications (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    talent_profile_id     INTEGER UNIQUE NOT NULL,
    github_username       TEXT,
    gitlab_username       TEXT,
    code_repository_url   TEXT,
    linkedin_url          TEXT,
    portfolio_score       REAL,
    code_sample_score     REAL,
    skill_tests_score     REAL,
    overall_score         REAL,
    portfolio_notes       TEXT,
    code_sample_notes     TEXT,
    verification_decision TEXT    NOT NULL DEFAULT 'pending',
    reviewed_by           TEXT,
    reviewed_at           DATETIME,
    rejection_reason      TEXT,
    portfolio_reviewed    INTEGER NOT NULL DEFAULT 0,
    code_sample_reviewed  INTEGER NOT NULL DEFAULT 0,
    skill_tests_taken     TEXT    NOT NULL DEFAULT '[]',
    linkedin_verified     INTEGER NOT NULL DEFAULT 0,
    identity_verified     INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (talent_profile_id) REFERENCES talent_profiles(id) ON DELETE CASCADE
);

-- ═══ Projects Table ═══
CREATE TABLE IF NOT EXISTS projects (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    title         TEXT    NOT NULL,
    status        TEXT    NOT NULL DEFAULT 'open',
    minimum_tier  TEXT    NOT NULL DEFAULT 'bronze',
    created_at    DATETIME DEFAULT (datetime('now', 'localtime'))
);

-- ═══ Applications Table ═══
-- A talent's application to a project; picked applications hold a pick slot.
CREATE TABLE IF NOT EXISTS applications (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id      INTEGER NOT NULL,
    talent_user_id  TEXT    NOT NULL,
    status          TEXT    NOT NULL DEFAULT 'pending',
    is_picked       INTEGER NOT NULL DEFAULT 0,
    picked_at       DATETIME,
    created_at      DATETIME DEFAULT (datetime('now', 'localtime')),
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
);

-- ═══ Indexes ═══
CREATE INDEX IF NOT EXISTS idx_profiles_tier          ON talent_profiles(tier);
CREATE INDEX IF NOT EXISTS idx_profiles_verification  ON talent_profiles(verification_status);
CREATE INDEX IF NOT EXISTS idx_applications_talent    ON applications(talent_user_id);
CREATE INDEX IF NOT EXISTS idx_applications_project   ON applications(project_id);
"""


class Database:
    """Async SQLite database connection manager.

    Manages the database lifecycle including initialization, schema creation,
    and a persistent connection with WAL mode and foreign keys enabled.

    Attributes:
        db_path: Resolved absolute path to the SQLite database file.
        write_lock: Held by multi-statement writes so coroutines sharing
            the connection never interleave inside one transaction.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the database manager.

        Args:
            db_path: Relative or absolute path to the SQLite database file.
                     Parent directories will be created if they don't exist.
        """
        self.db_path = Path(db_path).resolve()
        self._connection: aiosqlite.Connection | None = None
        self.write_lock = asyncio.Lock()
        logger.debug("Database manager initialized with path: %s", self.db_path)

    async def initialize(self) -> None:
        """Open the connection, set pragmas and create all tables."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Connecting to database: %s", self.db_path)
        self._connection = await aiosqlite.connect(str(self.db_path))

        await self._connection.execute("PRAGMA journal_mode=WAL")
        await self._connection.execute("PRAGMA foreign_keys=ON")
        self._connection.row_factory = aiosqlite.Row

        await self._connection.executescript(SCHEMA_SQL)
        await self._connection.commit()

        logger.info("Database initialized — all tables ready")

    async def get_connection(self) -> aiosqlite.Connection:
        """Get the active database connection, initializing if necessary."""
        if self._connection is None:
            await self.initialize()
        return self._connection

    async def close(self) -> None:
        """Close the connection. Safe to call when already closed."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            logger.info("Database connection closed")

    async def __aenter__(self) -> "Database":
        await self.initialize()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
