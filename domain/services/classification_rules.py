"""Keyword tables used to classify the worker's free-text reports.

One ``KeywordRules`` value per task type. Matching is a case-insensitive
substring test, so every phrase is stored lower-case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from domain.models import FORMS_FILLED, RESUME_SUBMITTED, ClassificationContext, OutcomeStatus


@dataclass(frozen=True)
class KeywordRules:
    success: tuple[str, ...]
    partial: tuple[str, ...]
    flags: Mapping[str, tuple[str, ...]]
    obstacles: tuple[str, ...]
    messages: Mapping[OutcomeStatus, str]
    placeholder_step: str
    fallback_message: str = "Failed to process task results"
    min_step_length: int = 10
    max_steps: int = 10
    flag_names: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        missing = set(OutcomeStatus) - set(self.messages)
        if missing:
            raise ValueError(f"message templates missing for: {sorted(s.value for s in missing)}")
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))
        object.__setattr__(self, "flag_names", tuple(self.flags))

    def message_for(self, status: OutcomeStatus, context: ClassificationContext) -> str:
        return self.messages[status].format(title=context.title, target=context.target)


APPLICATION_RULES = KeywordRules(
    success=(
        "application submitted",
        "successfully applied",
        "successfully submitted",
        "application complete",
        "thank you for applying",
    ),
    partial=(
        "partial application",
        "could not complete",
        "additional steps required",
        "account required",
    ),
    flags={
        RESUME_SUBMITTED: ("resume uploaded", "resume submitted", "resume attached"),
        FORMS_FILLED: ("form filled", "entered information", "completed fields"),
    },
    obstacles=(
        "login required",
        "account required",
        "could not",
        "unable to",
        "blocked",
        "captcha",
        "error",
    ),
    messages={
        OutcomeStatus.SUCCESS: "Successfully applied to {title} position at {target}.",
        OutcomeStatus.PARTIAL: "Partially completed application for {title} at {target}.",
        OutcomeStatus.FAILED: "Unable to complete application for {title} at {target}.",
    },
    placeholder_step="Application process was attempted",
    fallback_message="Failed to process auto-apply results",
)


PROFILE_FOUND = "profile_found"
CONTACT_INFO_FOUND = "contact_info_found"

CONTACT_SEARCH_RULES = KeywordRules(
    success=(
        "hr contact found",
        "found an hr",
        "found a recruiter",
        "found a talent acquisition",
        "successfully extracted",
        "collected the following",
    ),
    partial=(
        "linkedin member",
        "private profile",
        "limited information",
        "contact info not available",
        "email not available",
        "partially",
    ),
    flags={
        PROFILE_FOUND: ("linkedin.com/in/", "profile found", "opened the profile", "profile page"),
        CONTACT_INFO_FOUND: ("email:", "e-mail:", "phone:", "website:", "contact info overlay"),
    },
    obstacles=(
        "login required",
        "sign in",
        "authwall",
        "no linkedin page",
        "no suitable employee",
        "could not",
        "unable to",
        "blocked",
        "captcha",
        "error",
    ),
    messages={
        OutcomeStatus.SUCCESS: "Found {title} at {target}.",
        OutcomeStatus.PARTIAL: "Partially completed search for {title} at {target}.",
        OutcomeStatus.FAILED: "Unable to find {title} at {target}.",
    },
    placeholder_step="Contact search was attempted",
    fallback_message="Failed to process contact search results",
)


__all__ = [
    "KeywordRules",
    "APPLICATION_RULES",
    "CONTACT_SEARCH_RULES",
    "PROFILE_FOUND",
    "CONTACT_INFO_FOUND",
]
