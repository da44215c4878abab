"""
Domain services.

These services orchestrate remote automation tasks while depending only on
domain models and ports so that infrastructure and UI layers can remain thin.
"""

from .auto_apply import DEFAULT_APPLY_DEADLINE_SECONDS, AutoApplyService
from .classification_rules import (
    APPLICATION_RULES,
    CONTACT_INFO_FOUND,
    CONTACT_SEARCH_RULES,
    PROFILE_FOUND,
    KeywordRules,
)
from .classifier import ResultClassifier, normalize_report
from .contact_search import (
    CONTACT_SEARCH_TITLE,
    DEFAULT_CONTACT_SEARCH_DEADLINE_SECONDS,
    ContactSearchService,
)
from .launcher import TaskLauncher
from .orchestration import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    ProgressTracker,
    RemoteTaskOrchestrator,
    rejected_outcome,
)
from .poller import StatusPoller
from .watchdog import TaskWatchdog

__all__ = [
    "TaskLauncher",
    "StatusPoller",
    "TaskWatchdog",
    "ResultClassifier",
    "KeywordRules",
    "APPLICATION_RULES",
    "CONTACT_SEARCH_RULES",
    "PROFILE_FOUND",
    "CONTACT_INFO_FOUND",
    "CONTACT_SEARCH_TITLE",
    "normalize_report",
    "ProgressTracker",
    "RemoteTaskOrchestrator",
    "rejected_outcome",
    "AutoApplyService",
    "ContactSearchService",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "DEFAULT_APPLY_DEADLINE_SECONDS",
    "DEFAULT_CONTACT_SEARCH_DEADLINE_SECONDS",
]
