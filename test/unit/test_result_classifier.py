from __future__ import annotations

import pytest

from domain.errors import ClassificationFailure
from domain.models import ClassificationContext, OutcomeStatus
from domain.services import (
    APPLICATION_RULES,
    CONTACT_SEARCH_RULES,
    CONTACT_INFO_FOUND,
    PROFILE_FOUND,
    ResultClassifier,
    normalize_report,
)
from test.mocks import InMemoryLogger

_CTX = ClassificationContext(title="Backend Engineer", target="Acme")


def _classify(payload: object) -> object:
    return ResultClassifier(APPLICATION_RULES).classify(payload, _CTX)


def test_success_phrase_without_obstacles() -> None:
    outcome = _classify("Opened the careers page. Successfully submitted application for the role.")

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.obstacles == ()
    assert outcome.message == "Successfully applied to Backend Engineer position at Acme."


def test_flag_alone_upgrades_to_partial() -> None:
    outcome = _classify("Navigated to the job page and the resume uploaded without problems")

    assert outcome.status is OutcomeStatus.PARTIAL
    assert outcome.resume_submitted is True
    assert outcome.forms_filled is False
    assert outcome.message == "Partially completed application for Backend Engineer at Acme."


def test_login_obstacle_without_progress_is_failed() -> None:
    outcome = _classify("Opened the job page. A login required wall blocked the form. Returned to google.com")

    assert outcome.status is OutcomeStatus.FAILED
    assert any("login" in o.lower() for o in outcome.obstacles)
    assert "A login required wall blocked the form" in outcome.obstacles


def test_login_obstacle_with_partial_phrase_is_partial() -> None:
    outcome = _classify("Login required before applying, so I could not complete the form.")

    assert outcome.status is OutcomeStatus.PARTIAL
    assert any("login" in o.lower() for o in outcome.obstacles)


def test_numbered_steps_skip_short_fragments() -> None:
    outcome = _classify("Application submitted. Steps: 1. Opened form 2. Filled fields 3. Submitted")

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.steps == ("Application submitted. Steps:", "Opened form", "Filled fields")


def test_steps_are_capped_at_ten() -> None:
    report = "\n".join(f"Visited page number {i}" for i in range(15))

    outcome = _classify(report)

    assert len(outcome.steps) == 10
    assert outcome.steps[0] == "Visited page number 0"


def test_placeholder_step_when_nothing_is_long_enough() -> None:
    outcome = _classify("Done.")

    assert outcome.steps == ("Application process was attempted",)
    assert outcome.status is OutcomeStatus.FAILED


def test_same_payload_gives_equal_outcome() -> None:
    payload = {"result": "Form filled. Captcha appeared and blocked submission."}

    assert _classify(payload) == _classify(payload)


def test_mapping_payload_uses_result_text() -> None:
    outcome = _classify({"result": "Thank you for applying!", "meta": {"pages": 3}})

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.details == "Thank you for applying!"


def test_obstacle_sentences_are_not_repeated() -> None:
    outcome = _classify("Unable to upload, an error occurred. Nothing else happened here.")

    assert outcome.obstacles == ("Unable to upload, an error occurred",)


def test_missing_payload_falls_back_to_failed_outcome() -> None:
    logger = InMemoryLogger()

    outcome = ResultClassifier(APPLICATION_RULES, logger=logger).classify(None, _CTX)

    assert outcome.status is OutcomeStatus.FAILED
    assert outcome.message == "Failed to process auto-apply results"
    assert outcome.steps == ("Application process was attempted, but its report could not be processed",)
    assert outcome.obstacles[0].startswith("Error processing results:")
    assert "result_classification_failed" in logger.messages()


def test_unserialisable_payload_is_reported_not_raised() -> None:
    outcome = _classify({1j: "complex keys cannot be json encoded"})

    assert outcome.status is OutcomeStatus.FAILED
    assert outcome.message == "Failed to process auto-apply results"
    assert "complex keys" in outcome.details


def test_arbitrary_objects_are_classified_by_their_text() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "Application complete for this posting"

    outcome = _classify(Opaque())

    assert outcome.status is OutcomeStatus.SUCCESS


def test_normalize_report_rejects_none() -> None:
    with pytest.raises(ClassificationFailure):
        normalize_report(None)


def test_normalize_report_serialises_structured_payloads() -> None:
    assert normalize_report(["a", "b"]) == '["a", "b"]'
    assert normalize_report({"output": "visited page"}) == "visited page"
    assert normalize_report({"result": "", "text": "fallback text"}) == "fallback text"


def test_contact_rules_detect_profile_and_contact_info() -> None:
    classifier = ResultClassifier(CONTACT_SEARCH_RULES)
    ctx = ClassificationContext(title="HR contacts", target="Acme")

    outcome = classifier.classify(
        "Found a recruiter: Jane Doe, linkedin.com/in/janedoe. Email: jane@acme.com",
        ctx,
    )

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.flag(PROFILE_FOUND) is True
    assert outcome.flag(CONTACT_INFO_FOUND) is True
    assert outcome.resume_submitted is False
    assert outcome.message == "Found HR contacts at Acme."


def test_contact_rules_private_profiles_are_partial() -> None:
    classifier = ResultClassifier(CONTACT_SEARCH_RULES)
    ctx = ClassificationContext(title="HR contacts", target="Acme")

    outcome = classifier.classify("Only LinkedIn Member cards were visible. Could not open any profile.", ctx)

    assert outcome.status is OutcomeStatus.PARTIAL
    assert "Could not open any profile." in outcome.obstacles
