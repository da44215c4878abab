from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class UserProfile:
    """Applicant details copied into the auto-apply task description."""

    full_name: str
    email: str
    phone: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class JobPostingRef:
    """Lightweight reference to a job posting picked in the dashboard."""

    company_name: str
    job_title: str
    job_url: str


@dataclass(frozen=True)
class WorkerConfig:
    """Settings for talking to the remote automation worker, loaded from config.json."""

    worker_base_url: str
    api_key: str | None = None
    poll_interval_seconds: float = 3.0
    apply_deadline_seconds: float = 180.0
    contact_search_deadline_seconds: float = 180.0
    http_timeout_seconds: float = 30.0


@dataclass(frozen=True)
class TaskHandle:
    """Identifies one in-flight remote job. The id is opaque and owned by the worker."""

    id: str


class TaskState(str, Enum):
    """States reported by the worker's task-status endpoint."""

    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskState.RUNNING


@dataclass(frozen=True)
class StatusSnapshot:
    """
    One polling observation.

    Once the state is terminal exactly one of ``raw_payload`` (completed)
    and ``error_message`` (error) is populated.
    """

    state: TaskState
    raw_payload: Any = None
    error_message: str | None = None

    def __post_init__(self) -> None:
        if self.state is TaskState.COMPLETED:
            if self.raw_payload is None or self.error_message is not None:
                raise ValueError("completed snapshot carries a payload and no error message")
        elif self.state is TaskState.ERROR:
            if self.error_message is None or self.raw_payload is not None:
                raise ValueError("error snapshot carries an error message and no payload")


class ProgressStatus(str, Enum):
    """Coarse phase label pushed to progress observers."""

    STARTING = "starting"
    PREPARING = "preparing"
    POLLING = "polling"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressUpdate:
    status: ProgressStatus
    progress_percent: int
    elapsed_seconds: int
    message: str | None = None


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


RESUME_SUBMITTED = "resume_submitted"
FORMS_FILLED = "forms_filled"


@dataclass(frozen=True)
class StructuredOutcome:
    """
    Classified result of one remote task, the only value that outlives it.

    ``details`` keeps the raw report verbatim. ``flags`` holds the
    task-type specific sub-accomplishments; flags a task type does not
    declare read as False.
    """

    status: OutcomeStatus
    message: str
    details: str
    steps: Sequence[str]
    obstacles: Sequence[str] = field(default_factory=tuple)
    flags: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError("StructuredOutcome.steps must not be empty")
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "obstacles", tuple(self.obstacles))
        # Freeze internal mapping to uphold dataclass immutability expectations.
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def flag(self, name: str) -> bool:
        return bool(self.flags.get(name, False))

    @property
    def resume_submitted(self) -> bool:
        return self.flag(RESUME_SUBMITTED)

    @property
    def forms_filled(self) -> bool:
        return self.flag(FORMS_FILLED)


@dataclass(frozen=True)
class ClassificationContext:
    """Labels used only for message text, e.g. job title and company."""

    title: str
    target: str


__all__ = [
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
    "RESUME_SUBMITTED",
    "FORMS_FILLED",
]
