from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from domain.models import (
    ClassificationContext,
    ProgressUpdate,
    StatusSnapshot,
    StructuredOutcome,
    UserProfile,
    WorkerConfig,
)

ProgressObserver = Callable[[ProgressUpdate], None]


@runtime_checkable
class RemoteTaskWorkerPort(Protocol):
    """
    The three verbs of the remote automation worker.

    Implementations translate transport problems into the error taxonomy:
    ``start_task`` raises ``LaunchFailure``, ``get_task_status`` raises
    ``TransientPollError`` and ``stop_task`` raises ``WatchdogError``.
    """

    async def start_task(
        self,
        description: str,
        *,
        system_prompt: str | None = None,
        api_key: str | None = None,
    ) -> Mapping[str, Any]:
        ...

    async def get_task_status(self, task_id: str) -> StatusSnapshot:
        ...

    async def stop_task(self, task_id: str) -> Mapping[str, Any]:
        ...


@runtime_checkable
class OutcomeClassifierPort(Protocol):
    """Turns a raw worker report into a structured outcome. Must never raise."""

    def classify(self, raw_payload: Any, context: ClassificationContext) -> StructuredOutcome:
        ...


@runtime_checkable
class ConfigProviderPort(Protocol):
    """Read-only access to worker settings and the applicant profile."""

    def get_config(self) -> WorkerConfig:
        ...

    def get_profile(self) -> UserProfile:
        ...

    def validate(self) -> list[str]:
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Time source for deterministic and easily testable code."""

    def now(self) -> datetime:
        ...

    def monotonic(self) -> float:
        ...


@runtime_checkable
class IdGeneratorPort(Protocol):
    """Generation of correlation ids for orchestration runs."""

    def new_run_id(self) -> str:
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Structured, testable logging abstraction."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, **fields: Any) -> None:
        ...


__all__ = [
    "ProgressObserver",
    "RemoteTaskWorkerPort",
    "OutcomeClassifierPort",
    "ConfigProviderPort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
