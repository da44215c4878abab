"""Error taxonomy for remote task orchestration.

Only ``LaunchFailure`` and ``PollTimeout`` end an orchestration call early,
and the orchestrator turns both into a failed outcome. The others are
recovered where they are raised.
"""

from __future__ import annotations


class RemoteTaskError(RuntimeError):
    pass


class LaunchFailure(RemoteTaskError):
    """The start-task call was rejected or returned no task id."""

    def __init__(self, status_text: str) -> None:
        super().__init__(status_text)
        self.status_text = status_text


class PollTimeout(RemoteTaskError):
    """No terminal snapshot was observed before the deadline."""

    def __init__(self, deadline: float) -> None:
        super().__init__(f"Polling timed out after {deadline:g}s")
        self.deadline = deadline


class TransientPollError(RemoteTaskError):
    """A single status query failed; the poller keeps going."""


class ClassificationFailure(RemoteTaskError):
    """The raw report could not be classified."""


class WatchdogError(RemoteTaskError):
    """Checking or stopping a runaway task failed."""


__all__ = [
    "RemoteTaskError",
    "LaunchFailure",
    "PollTimeout",
    "TransientPollError",
    "ClassificationFailure",
    "WatchdogError",
]
