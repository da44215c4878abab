"""
Domain layer package.

This package contains the remote task orchestration logic and the models
and ports it depends on, independent of any transport or framework.
"""

from .errors import (  # noqa: F401
    ClassificationFailure,
    LaunchFailure,
    PollTimeout,
    RemoteTaskError,
    TransientPollError,
    WatchdogError,
)
from .models import (  # noqa: F401
    ClassificationContext,
    JobPostingRef,
    OutcomeStatus,
    ProgressStatus,
    ProgressUpdate,
    StatusSnapshot,
    StructuredOutcome,
    TaskHandle,
    TaskState,
    UserProfile,
    WorkerConfig,
)
from .ports import (  # noqa: F401
    ClockPort,
    ConfigProviderPort,
    IdGeneratorPort,
    LoggerPort,
    OutcomeClassifierPort,
    ProgressObserver,
    RemoteTaskWorkerPort,
)

__all__ = [
    # Models
    "UserProfile",
    "JobPostingRef",
    "WorkerConfig",
    "TaskHandle",
    "TaskState",
    "StatusSnapshot",
    "ProgressStatus",
    "ProgressUpdate",
    "OutcomeStatus",
    "StructuredOutcome",
    "ClassificationContext",
    # Errors
    "RemoteTaskError",
    "LaunchFailure",
    "PollTimeout",
    "TransientPollError",
    "ClassificationFailure",
    "WatchdogError",
    # Ports
    "ProgressObserver",
    "RemoteTaskWorkerPort",
    "OutcomeClassifierPort",
    "ConfigProviderPort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
