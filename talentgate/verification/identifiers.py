"""Talentgate — Account Identifier Validation.

Syntactic checks for the GitHub, GitLab and LinkedIn identifiers a
talent submits for verification. No network lookups: a well-formed
username may still not exist.
"""

from __future__ import annotations

import re
from typing import Optional

# ── Patterns ─────────────────────────────────────────────
# 1-39 chars, alphanumeric and hyphens, no leading/trailing hyphen.
_GITHUB_USERNAME = re.compile(r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?")
_GITLAB_USERNAME = re.compile(r"[a-zA-Z0-9._-]+")
_LINKEDIN_URL = re.compile(r"https?://(?:www\.)?linkedin\.com/(?:in|pub)/[a-zA-Z0-9-]+/?")

# Tried in order by extract_github_username.
_GITHUB_URL = re.compile(r"github\.com/([a-zA-Z0-9-]+)")
_GITHUB_HANDLE = re.compile(r"@?([a-zA-Z0-9-]+)")


def is_valid_github_username(username: str) -> bool:
    """Check GitHub username syntax."""
    return _GITHUB_USERNAME.fullmatch(username) is not None


def is_valid_gitlab_username(username: str) -> bool:
    """Check GitLab username syntax (alphanumerics, dots, underscores, hyphens)."""
    return _GITLAB_USERNAME.fullmatch(username) is not None


def is_valid_linkedin_url(url: str) -> bool:
    """Check that a URL points at a LinkedIn personal profile (/in/ or /pub/)."""
    return _LINKEDIN_URL.fullmatch(url) is not None


def extract_github_username(value: str) -> Optional[str]:
    """Pull a GitHub username out of a bare name, profile URL or @handle.

    Args:
        value: User-supplied text, e.g. "octocat",
            "https://github.com/octocat" or "@octocat".

    Returns:
        The validated username, or None when nothing usable was found.
    """
    if is_valid_github_username(value):
        return value

    url_match = _GITHUB_URL.search(value)
    if url_match and is_valid_github_username(url_match.group(1)):
        return url_match.group(1)

    handle_match = _GITHUB_HANDLE.fullmatch(value)
    if handle_match and is_valid_github_username(handle_match.group(1)):
        return handle_match.group(1)

    return None
