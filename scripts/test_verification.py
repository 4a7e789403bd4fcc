"""Talentgate — Verification Rules Test.

Covers the weighted overall score, approval against minimum scores,
checklist progress, platform access, status info, identifier
validators and the checklist itself.

Run: python scripts/test_verification.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from talentgate.database.models import TalentVerification
from talentgate.utils.logger import get_logger
from talentgate.verification import (
    DEFAULT_VERIFICATION_REQUIREMENTS,
    VerificationRequirements,
    VerificationScores,
    VerificationStatus,
    calculate_overall_score,
    calculate_verification_progress,
    can_access_platform,
    extract_github_username,
    generate_verification_checklist,
    get_verification_status_info,
    is_valid_github_username,
    is_valid_gitlab_username,
    is_valid_linkedin_url,
    meets_verification_requirements,
)

logger = get_logger(__name__)

_passed = 0
_failed = 0


def check(label: str, condition: bool) -> None:
    """Track a check result; a failed check stops the current scenario.

    Args:
        label: Test description.
        condition: Whether the test passed.
    """
    global _passed, _failed
    if condition:
        _passed += 1
        logger.info("    ✅ %s", label)
    else:
        _failed += 1
        logger.error("    ❌ FAILED: %s", label)
        raise AssertionError(label)


def make_record(**kwargs: object) -> TalentVerification:
    """Build a TalentVerification with every checklist flag off by default."""
    defaults: dict[str, object] = {"talent_profile_id": 1}
    defaults.update(kwargs)
    return TalentVerification(**defaults)


def test_overall_score() -> None:
    logger.info("═══ Overall score ═══")
    check("no scores → 0", calculate_overall_score(VerificationScores()) == 0)
    check(
        "portfolio only → 80, not 80 * 0.35",
        calculate_overall_score(VerificationScores(portfolio_score=80)) == 80,
    )
    check(
        "portfolio 80 + code 60 → 70",
        calculate_overall_score(VerificationScores(portfolio_score=80, code_sample_score=60)) == 70,
    )
    all_three = VerificationScores(portfolio_score=70, code_sample_score=80, skill_tests_score=90)
    check("three scores → 78.33", calculate_overall_score(all_three) == 78.33)
    check(
        "portfolio 90 + tests 60 → 79.09",
        calculate_overall_score(VerificationScores(portfolio_score=90, skill_tests_score=60)) == 79.09,
    )
    check(
        "supplied overall is ignored by the formula",
        calculate_overall_score(VerificationScores(portfolio_score=50, overall_score=99)) == 50,
    )


def test_requirements() -> None:
    logger.info("═══ Meets requirements ═══")
    at_minimum = VerificationScores(portfolio_score=60, code_sample_score=60, overall_score=65)
    result = meets_verification_requirements(at_minimum)
    check("exact minimums → approved", result.approved and result.reasons == [])

    short = VerificationScores(portfolio_score=60, code_sample_score=60, overall_score=64)
    result = meets_verification_requirements(short)
    check("overall 64 → rejected", not result.approved)
    check(
        "overall shortfall reported",
        any(r.startswith("Overall score (64) below minimum (65)") for r in result.reasons),
    )

    result = meets_verification_requirements(VerificationScores())
    check("nothing reviewed → three reasons", len(result.reasons) == 3)
    check("portfolio not completed", "Portfolio review not completed" in result.reasons)
    check("code sample not completed", "Code sample review not completed" in result.reasons)
    check("computed overall 0 reported", "Overall score (0) below minimum (65)" in result.reasons)

    result = meets_verification_requirements(VerificationScores(portfolio_score=59.5, code_sample_score=90))
    check(
        "below-minimum portfolio keeps decimals",
        "Portfolio score (59.5) below minimum (60)" in result.reasons,
    )
    check("computed overall 74.75 passes", not any(r.startswith("Overall") for r in result.reasons))

    lenient = VerificationRequirements(portfolio_required=False, code_repository_required=False)
    result = meets_verification_requirements(VerificationScores(overall_score=70), lenient)
    check("nothing required, overall 70 → approved", result.approved)

    strict = VerificationRequirements(skill_tests_required=True)
    low_tests = VerificationScores(
        portfolio_score=80, code_sample_score=80, skill_tests_score=65, overall_score=80,
    )
    result = meets_verification_requirements(low_tests, strict)
    check("skill tests 65 < 70 when required", result.reasons == ["Skill tests score (65) below minimum (70)"])
    check("skill tests ignored when not required", meets_verification_requirements(low_tests).approved)

    no_tests = VerificationScores(portfolio_score=80, code_sample_score=80, overall_score=80)
    check("missing skill tests not flagged", meets_verification_requirements(no_tests, strict).approved)


def test_progress() -> None:
    logger.info("═══ Verification progress ═══")
    progress = calculate_verification_progress(make_record())
    check("nothing done → 0%", progress.completion_percentage == 0)

    progress = calculate_verification_progress(
        make_record(portfolio_reviewed=True, code_sample_reviewed=True)
    )
    check("2 of 4 default items → 50%", progress.completion_percentage == 50)
    check("flags echoed", progress.portfolio_reviewed and not progress.linkedin_verified)

    strict = VerificationRequirements(skill_tests_required=True)
    progress = calculate_verification_progress(make_record(skill_tests_taken=["python"]), strict)
    check("skill test list counts when required → 20%", progress.completion_percentage == 20)
    check("skill_tests_taken flag set", progress.skill_tests_taken is True)

    progress = calculate_verification_progress(make_record(skill_tests_taken=[]), strict)
    check("empty skill test list does not count", progress.completion_percentage == 0)
    check("empty list flag false", progress.skill_tests_taken is False)

    record = make_record(skill_tests_taken="python")
    progress = calculate_verification_progress(record, strict)
    check("non-list skill tests do not count", progress.completion_percentage == 0)

    three = VerificationRequirements(
        portfolio_required=True,
        code_repository_required=True,
        skill_tests_required=False,
        linkedin_required=True,
        identity_verification_required=False,
    )
    progress = calculate_verification_progress(make_record(linkedin_verified=True), three)
    check("1 of 3 → 33%", progress.completion_percentage == 33)
    progress = calculate_verification_progress(
        make_record(linkedin_verified=True, portfolio_reviewed=True), three,
    )
    check("2 of 3 → 67%", progress.completion_percentage == 67)

    none_required = VerificationRequirements(
        portfolio_required=False,
        code_repository_required=False,
        skill_tests_required=False,
        linkedin_required=False,
        identity_verification_required=False,
    )
    progress = calculate_verification_progress(make_record(portfolio_reviewed=True), none_required)
    check("nothing required → 0%", progress.completion_percentage == 0)


def test_platform_access() -> None:
    logger.info("═══ Platform access ═══")
    check("verified + access", can_access_platform(VerificationStatus.VERIFIED, True))
    check("verified string + access", can_access_platform("verified", True))
    check("verified without access flag", not can_access_platform(VerificationStatus.VERIFIED, False))
    check("access flag but in review", not can_access_platform(VerificationStatus.IN_REVIEW, True))


def test_status_info() -> None:
    logger.info("═══ Status info ═══")
    check("pending label", get_verification_status_info(VerificationStatus.PENDING).label == "Pending Verification")
    check("in_review color", get_verification_status_info("in_review").color == "blue")
    check("verified color", get_verification_status_info(VerificationStatus.VERIFIED).color == "green")
    check("rejected label", get_verification_status_info("rejected").label == "Verification Failed")
    unknown = get_verification_status_info("suspended")
    check("unknown status falls back", unknown.label == "Unknown" and unknown.color == "gray")
    check("None falls back", get_verification_status_info(None).label == "Unknown")


def test_identifiers() -> None:
    logger.info("═══ Identifier validators ═══")
    check("github octocat", is_valid_github_username("octocat"))
    check("github with hyphen", is_valid_github_username("jane-doe"))
    check("github 39 chars", is_valid_github_username("a" * 39))
    check("github 40 chars rejected", not is_valid_github_username("a" * 40))
    check("github leading hyphen rejected", not is_valid_github_username("-jane"))
    check("github trailing hyphen rejected", not is_valid_github_username("jane-"))
    check("github underscore rejected", not is_valid_github_username("jane_doe"))
    check("github trailing newline rejected", not is_valid_github_username("jane\n"))

    check("gitlab dots/underscores", is_valid_gitlab_username("jane.doe_dev-1"))
    check("gitlab space rejected", not is_valid_gitlab_username("jane doe"))
    check("gitlab empty rejected", not is_valid_gitlab_username(""))

    check("linkedin /in/ with slash", is_valid_linkedin_url("https://www.linkedin.com/in/jane-doe/"))
    check("linkedin /pub/ http no www", is_valid_linkedin_url("http://linkedin.com/pub/jane"))
    check("linkedin company rejected", not is_valid_linkedin_url("https://linkedin.com/company/acme"))
    check("linkedin other host rejected", not is_valid_linkedin_url("https://linkedin.co/in/jane"))

    check("extract URL", extract_github_username("https://github.com/octocat") == "octocat")
    check("extract @handle", extract_github_username("@octocat") == "octocat")
    check("extract bare", extract_github_username("octocat") == "octocat")
    check("extract repo URL", extract_github_username("github.com/octocat/hello-world") == "octocat")
    check("extract -bad- → None", extract_github_username("-bad-") is None)
    check("extract garbage → None", extract_github_username("not a user!") is None)


def test_checklist() -> None:
    logger.info("═══ Checklist ═══")
    items = generate_verification_checklist()
    check("five items by default", [i.id for i in items] == [
        "portfolio", "code_repository", "skill_tests", "linkedin", "identity",
    ])
    skill = next(i for i in items if i.id == "skill_tests")
    check("skill tests optional by default", not skill.required and "optional" in skill.label)

    strict = generate_verification_checklist(VerificationRequirements(skill_tests_required=True))
    skill = next(i for i in strict if i.id == "skill_tests")
    check("skill tests required wording", skill.required and skill.label == "Complete skill verification tests")

    minimal = generate_verification_checklist(VerificationRequirements(
        portfolio_required=False,
        code_repository_required=False,
        skill_tests_required=False,
        linkedin_required=False,
        identity_verification_required=False,
    ))
    check("skill tests never omitted", [i.id for i in minimal] == ["skill_tests"])
    check("defaults unchanged", DEFAULT_VERIFICATION_REQUIREMENTS.skill_tests_required is False)


SCENARIOS = [
    test_overall_score,
    test_requirements,
    test_progress,
    test_platform_access,
    test_status_info,
    test_identifiers,
    test_checklist,
]


def main() -> None:
    """Run all verification scenarios."""
    logger.info("╔══════════════════════════════════════════════════════╗")
    logger.info("║  Talentgate — Verification Rules Tests               ║")
    logger.info("╚══════════════════════════════════════════════════════╝")

    for scenario in SCENARIOS:
        try:
            scenario()
        except AssertionError:
            logger.error("  ↳ %s stopped at first failure", scenario.__name__)

    logger.info("═══════════════════════════════════════════")
    logger.info("  Results: %d passed, %d failed", _passed, _failed)
    logger.info("═══════════════════════════════════════════")

    if _failed > 0:
        logger.error("Some tests failed!")
        sys.exit(1)
    logger.info("🎉 All verification tests passed!")


if __name__ == "__main__":
    main()
