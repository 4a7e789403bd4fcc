#!/usr/bin/env python3
"""Talentgate — CLI Runner.

Performs pre-flight checks and hands the arguments to the admin CLI.

Usage:
    python scripts/run.py tier-progress user-42
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

REQUIRED_FILES = [
    "config/settings.yaml",
]


def preflight_checks() -> bool:
    """Run pre-flight checks before starting the CLI.

    Checks:
      - .env file exists (optional, defaults apply without it)
      - Required config files exist
      - data/ and logs/ directories exist (creates them)

    Returns:
        True if all checks pass, False otherwise.
    """
    os.chdir(str(PROJECT_ROOT))
    ok = True

    env_path = PROJECT_ROOT / ".env"
    if env_path.exists():
        from dotenv import load_dotenv
        load_dotenv(env_path)
    else:
        print("⚠️  .env not found, using defaults from config/settings.yaml")

    for f in REQUIRED_FILES:
        if not (PROJECT_ROOT / f).exists():
            print(f"❌ {f} not found!")
            ok = False

    for d in ("data", "logs"):
        (PROJECT_ROOT / d).mkdir(exist_ok=True)

    return ok


def main() -> None:
    """Entry point: run checks then the CLI."""
    if not preflight_checks():
        print("❌ Pre-flight checks failed! Fix the issues above and try again.")
        sys.exit(1)

    from talentgate.main import main as cli_main
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
