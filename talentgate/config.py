"""Talentgate — Configuration Loader.

Loads and validates application configuration from a YAML file.
Resolves environment variables referenced via ${VAR_NAME} or
${VAR_NAME:-default} syntax. Uses frozen dataclasses for typed access.

Tier thresholds and scoring weights are compiled into the rule modules
and are not configurable here.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from talentgate.utils.logger import get_logger
from talentgate.verification.scoring import (
    DEFAULT_VERIFICATION_REQUIREMENTS,
    VerificationRequirements,
)

logger = get_logger(__name__)

# ── Path Constants ────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
SETTINGS_PATH = CONFIG_DIR / "settings.yaml"

# ── Environment Variable Pattern ─────────────────────────
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?}")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ═══════════════════════════════════════════════════════════
# Configuration Dataclasses
# ═══════════════════════════════════════════════════════════


@dataclass(frozen=True)
class VerificationConfig:
    """Verification workflow settings."""

    requirements: VerificationRequirements


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration container."""

    database_path: str
    log_level: str
    verification: VerificationConfig


# ═══════════════════════════════════════════════════════════
# YAML Loading & Environment Variable Resolution
# ═══════════════════════════════════════════════════════════


def _resolve_env_vars(value: Any) -> Any:
    """Recursively resolve ${VAR_NAME} references in YAML values.

    Args:
        value: A string, dict, list, or primitive from parsed YAML.

    Returns:
        The same structure with placeholders replaced by environment
        values, or by the inline default for ${VAR:-default}.

    Raises:
        ValueError: If a referenced variable is unset and has no default.
    """
    if isinstance(value, str):
        def _replace(match: re.Match[str]) -> str:
            var_name, default = match.group(1), match.group(2)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            raise ValueError(
                f"Environment variable '${{{var_name}}}' is required but not set. "
                f"Add it to your .env file or export it in your shell."
            )

        return ENV_VAR_PATTERN.sub(_replace, value)
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file with UTF-8 encoding.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        ValueError: If the file is empty.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Configuration file is empty: {path}")

    logger.debug("Loaded configuration from %s", path)
    return data


def _validate_keys(data: dict[str, Any], required: list[str], section: str) -> None:
    """Validate that all required keys exist in a config section.

    Raises:
        ValueError: If any required key is missing.
    """
    missing = [key for key in required if key not in data]
    if missing:
        raise ValueError(
            f"Missing required configuration keys in '{section}': {', '.join(missing)}"
        )


# ═══════════════════════════════════════════════════════════
# Dataclass Builders
# ═══════════════════════════════════════════════════════════


def _build_verification_config(data: dict[str, Any] | None) -> VerificationConfig:
    """Build a VerificationConfig, filling gaps from the defaults.

    Args:
        data: The optional 'verification' section of settings.yaml.

    Raises:
        ValueError: On unknown requirement keys or non-boolean values.
    """
    overrides = (data or {}).get("requirements") or {}
    known = {f.name for f in fields(VerificationRequirements)}

    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(
            f"Unknown keys in 'verification.requirements': {', '.join(unknown)}"
        )
    for key, flag in overrides.items():
        if not isinstance(flag, bool):
            raise ValueError(
                f"'verification.requirements.{key}' must be true or false, got {flag!r}"
            )

    merged = {
        name: overrides.get(name, getattr(DEFAULT_VERIFICATION_REQUIREMENTS, name))
        for name in known
    }
    return VerificationConfig(requirements=VerificationRequirements(**merged))


def _build_log_level(data: dict[str, Any]) -> str:
    _validate_keys(data, ["level"], "logging")
    level = str(data["level"]).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Invalid logging.level '{data['level']}', expected one of {', '.join(_LOG_LEVELS)}"
        )
    return level


# ═══════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════


def load_config(
    settings_path: Path | None = None,
    env_path: Path | None = None,
) -> AppConfig:
    """Load the complete application configuration.

    Args:
        settings_path: Override path to settings.yaml. Defaults to config/settings.yaml.
        env_path: Override path to .env file. Defaults to project root .env.

    Returns:
        A fully validated AppConfig instance.

    Raises:
        FileNotFoundError: If the settings file is missing.
        ValueError: If required fields are missing or env vars are unset.
    """
    env_file = env_path or (PROJECT_ROOT / ".env")
    load_dotenv(env_file)
    logger.debug("Loaded environment from %s", env_file)

    settings = _resolve_env_vars(_load_yaml(settings_path or SETTINGS_PATH))
    _validate_keys(settings, ["database", "logging"], "settings")
    _validate_keys(settings["database"], ["path"], "database")

    config = AppConfig(
        database_path=settings["database"]["path"],
        log_level=_build_log_level(settings["logging"]),
        verification=_build_verification_config(settings.get("verification")),
    )

    logger.info("Configuration loaded successfully")
    logger.debug("Database path: %s", config.database_path)
    logger.debug("Verification requirements: %s", config.verification.requirements)

    return config
