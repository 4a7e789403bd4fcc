"""Talentgate — Configuration Test.

Loads the shipped settings and a set of temporary settings files to
check env-var resolution, defaults and validation errors.

Run: python scripts/test_config.py
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from talentgate.config import load_config
from talentgate.utils.logger import get_logger

logger = get_logger(__name__)

_passed = 0
_failed = 0


def check(label: str, condition: bool) -> None:
    """Track a check result; a failed check stops the current scenario."""
    global _passed, _failed
    if condition:
        _passed += 1
        logger.info("    ✅ %s", label)
    else:
        _failed += 1
        logger.error("    ❌ FAILED: %s", label)
        raise AssertionError(label)


def _load_text(text: str):
    """Load config from YAML text in a temp dir with no .env file."""
    with tempfile.TemporaryDirectory() as tmp:
        settings = Path(tmp) / "settings.yaml"
        settings.write_text(text, encoding="utf-8")
        return load_config(settings_path=settings, env_path=Path(tmp) / ".env")


def _raises_value_error(text: str) -> bool:
    try:
        _load_text(text)
    except ValueError as e:
        logger.info("    ↳ %s", e)
        return True
    return False


def test_shipped_settings() -> None:
    logger.info("═══ Shipped settings ═══")
    os.environ.pop("TALENTGATE_DB_PATH", None)
    config = load_config(env_path=PROJECT_ROOT / ".env.example.missing")
    check("default database path", config.database_path == "data/talentgate.db")
    check("log level valid", config.log_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))
    check("skill tests optional", config.verification.requirements.skill_tests_required is False)
    check("portfolio required", config.verification.requirements.portfolio_required is True)


def test_env_resolution() -> None:
    logger.info("═══ Environment variables ═══")
    os.environ["TG_TEST_DB_PATH"] = "/tmp/tg-test.db"
    try:
        config = _load_text(
            "database:\n  path: \"${TG_TEST_DB_PATH}\"\nlogging:\n  level: debug\n"
        )
    finally:
        del os.environ["TG_TEST_DB_PATH"]
    check("env var substituted", config.database_path == "/tmp/tg-test.db")
    check("level upper-cased", config.log_level == "DEBUG")
    check("verification section optional", config.verification.requirements.linkedin_required is True)

    config = _load_text(
        "database:\n  path: \"${TG_UNSET_VAR_XYZ:-fallback.db}\"\nlogging:\n  level: INFO\n"
    )
    check("inline default used", config.database_path == "fallback.db")

    check(
        "unset var without default → ValueError",
        _raises_value_error("database:\n  path: \"${TG_UNSET_VAR_XYZ}\"\nlogging:\n  level: INFO\n"),
    )


def test_overrides_and_validation() -> None:
    logger.info("═══ Overrides & validation ═══")
    config = _load_text(
        "database:\n  path: a.db\nlogging:\n  level: INFO\n"
        "verification:\n  requirements:\n    skill_tests_required: true\n    linkedin_required: false\n"
    )
    req = config.verification.requirements
    check("override applied", req.skill_tests_required is True and req.linkedin_required is False)
    check("others keep defaults", req.identity_verification_required is True)

    check("missing logging → ValueError", _raises_value_error("database:\n  path: a.db\n"))
    check(
        "bad log level → ValueError",
        _raises_value_error("database:\n  path: a.db\nlogging:\n  level: LOUD\n"),
    )
    check(
        "unknown requirement key → ValueError",
        _raises_value_error(
            "database:\n  path: a.db\nlogging:\n  level: INFO\n"
            "verification:\n  requirements:\n    selfie_required: true\n"
        ),
    )
    check(
        "non-boolean flag → ValueError",
        _raises_value_error(
            "database:\n  path: a.db\nlogging:\n  level: INFO\n"
            "verification:\n  requirements:\n    linkedin_required: maybe\n"
        ),
    )
    check("empty file → ValueError", _raises_value_error(""))

    try:
        load_config(settings_path=PROJECT_ROOT / "config" / "does-not-exist.yaml")
        missing = False
    except FileNotFoundError:
        missing = True
    check("missing file → FileNotFoundError", missing)


SCENARIOS = [test_shipped_settings, test_env_resolution, test_overrides_and_validation]


def main() -> None:
    """Run all configuration scenarios."""
    for scenario in SCENARIOS:
        try:
            scenario()
        except AssertionError:
            logger.error("  ↳ %s stopped at first failure", scenario.__name__)

    logger.info("  Results: %d passed, %d failed", _passed, _failed)
    if _failed > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
