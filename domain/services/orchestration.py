from __future__ import annotations

import asyncio

from domain.errors import LaunchFailure, PollTimeout
from domain.models import (
    ClassificationContext,
    OutcomeStatus,
    ProgressStatus,
    ProgressUpdate,
    StructuredOutcome,
    TaskState,
)
from domain.ports import (
    ClockPort,
    IdGeneratorPort,
    LoggerPort,
    OutcomeClassifierPort,
    ProgressObserver,
    RemoteTaskWorkerPort,
)
from domain.services.classifier import ResultClassifier
from domain.services.launcher import TaskLauncher
from domain.services.poller import StatusPoller
from domain.services.watchdog import TaskWatchdog

DEFAULT_POLL_INTERVAL_SECONDS = 3.0


class ProgressTracker:
    """
    Wraps the caller's observer for one orchestration call.

    Keeps the percentage non-decreasing and below 100 until ``finish``,
    which delivers the single final update. Observer errors are logged and
    never propagate into the orchestration flow.
    """

    def __init__(
        self,
        observer: ProgressObserver | None,
        *,
        clock: ClockPort,
        logger: LoggerPort,
        run_id: str,
    ) -> None:
        self._observer = observer
        self._clock = clock
        self._logger = logger
        self._run_id = run_id
        self._started = clock.monotonic()
        self._last_percent = 0
        self._finished = False

    @property
    def elapsed(self) -> float:
        return self._clock.monotonic() - self._started

    @property
    def finished(self) -> bool:
        return self._finished

    def percent_of(self, deadline: float) -> int:
        return min(99, int(round(100 * self.elapsed / deadline)))

    def emit(self, status: ProgressStatus, percent: int, message: str | None = None) -> None:
        if self._finished:
            return
        self._last_percent = max(self._last_percent, min(99, max(0, percent)))
        self._deliver(status, self._last_percent, message)

    def forward(self, update: ProgressUpdate) -> None:
        self.emit(update.status, update.progress_percent, update.message)

    def finish(self, status: ProgressStatus, message: str) -> None:
        if self._finished:
            return
        self._finished = True
        self._last_percent = 100
        self._deliver(status, 100, message)

    def _deliver(self, status: ProgressStatus, percent: int, message: str | None) -> None:
        if self._observer is None:
            return
        update = ProgressUpdate(
            status=status,
            progress_percent=percent,
            elapsed_seconds=int(round(self.elapsed)),
            message=message,
        )
        try:
            self._observer(update)
        except Exception as exc:
            self._logger.warning(
                "progress_observer_failed",
                run_id=self._run_id,
                status=status.value,
                error=str(exc),
            )


class RemoteTaskOrchestrator:
    """
    Runs one remote automation task end to end: launch, arm the watchdog,
    poll under the deadline, classify the report.

    ``run`` always returns a ``StructuredOutcome``. Launch failures, worker
    errors and timeouts come back as failed outcomes, and the observer
    always sees exactly one final update at 100%.
    """

    def __init__(
        self,
        *,
        launcher: TaskLauncher,
        poller: StatusPoller,
        watchdog: TaskWatchdog,
        classifier: OutcomeClassifierPort,
        clock: ClockPort,
        id_generator: IdGeneratorPort,
        logger: LoggerPort,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._launcher = launcher
        self._poller = poller
        self._watchdog = watchdog
        self._classifier = classifier
        self._clock = clock
        self._id_generator = id_generator
        self._logger = logger
        self._poll_interval = poll_interval

    @classmethod
    def for_worker(
        cls,
        worker: RemoteTaskWorkerPort,
        *,
        clock: ClockPort,
        id_generator: IdGeneratorPort,
        logger: LoggerPort,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        classifier: OutcomeClassifierPort | None = None,
    ) -> "RemoteTaskOrchestrator":
        return cls(
            launcher=TaskLauncher(worker=worker, logger=logger),
            poller=StatusPoller(worker=worker, clock=clock, logger=logger),
            watchdog=TaskWatchdog(worker=worker, logger=logger),
            classifier=classifier or ResultClassifier(logger=logger),
            clock=clock,
            id_generator=id_generator,
            logger=logger,
            poll_interval=poll_interval,
        )

    @property
    def watchdog(self) -> TaskWatchdog:
        return self._watchdog

    async def run(
        self,
        description: str,
        credentials: str | None = None,
        *,
        deadline: float,
        context: ClassificationContext,
        on_update: ProgressObserver | None = None,
        system_prompt: str | None = None,
        classifier: OutcomeClassifierPort | None = None,
    ) -> StructuredOutcome:
        if deadline <= 0:
            raise ValueError("deadline must be positive")

        run_id = self._id_generator.new_run_id()
        self._logger.info(
            "remote_task_run_started",
            run_id=run_id,
            started_at=self._clock.now().isoformat(),
            deadline=deadline,
        )
        tracker = ProgressTracker(on_update, clock=self._clock, logger=self._logger, run_id=run_id)
        tracker.emit(ProgressStatus.STARTING, 0, "Starting remote task...")

        try:
            return await self._run(
                description,
                credentials,
                deadline=deadline,
                context=context,
                system_prompt=system_prompt,
                classifier=classifier or self._classifier,
                tracker=tracker,
                run_id=run_id,
            )
        except asyncio.CancelledError:
            self._logger.warning("remote_task_cancelled", run_id=run_id)
            tracker.finish(ProgressStatus.ERROR, "Remote task was cancelled")
            raise
        except Exception as exc:
            self._logger.error("remote_task_unexpected_error", run_id=run_id, error=str(exc))
            return self._failed(
                tracker,
                message=str(exc) or "Unknown error occurred",
                details=repr(exc),
                steps=("Started remote task", "Encountered an unexpected error"),
            )

    async def _run(
        self,
        description: str,
        credentials: str | None,
        *,
        deadline: float,
        context: ClassificationContext,
        system_prompt: str | None,
        classifier: OutcomeClassifierPort,
        tracker: ProgressTracker,
        run_id: str,
    ) -> StructuredOutcome:
        try:
            handle = await asyncio.wait_for(
                self._launcher.launch(
                    description,
                    credentials,
                    system_prompt=system_prompt,
                    run_id=run_id,
                ),
                timeout=deadline,
            )
        except asyncio.TimeoutError:
            # The worker may have accepted the task, but without an id it cannot be stopped.
            self._logger.error("remote_task_launch_timed_out", run_id=run_id, deadline=deadline)
            message = f"Failed to start remote task: no response within {deadline:g}s"
            return self._failed(
                tracker,
                message=message,
                details=message,
                steps=("Launching the remote task timed out",),
            )
        except LaunchFailure as exc:
            self._logger.error("remote_task_launch_failed", run_id=run_id, error=exc.status_text)
            return self._failed(
                tracker,
                message=f"Failed to start remote task: {exc.status_text}",
                details=exc.status_text,
                steps=("Launching the remote task failed",),
            )

        timer = self._watchdog.arm(handle, deadline, run_id=run_id)
        tracker.emit(
            ProgressStatus.PREPARING,
            tracker.percent_of(deadline),
            "Task started, waiting for results...",
        )

        # The launch already used part of the deadline.
        budget = deadline - tracker.elapsed
        try:
            if budget <= 0:
                raise PollTimeout(deadline)
            snapshot = await self._poller.poll_until_terminal(
                handle,
                interval=self._poll_interval,
                deadline=budget,
                on_update=tracker.forward,
                run_id=run_id,
            )
        except PollTimeout:
            return self._failed(
                tracker,
                message=str(PollTimeout(deadline)),
                details=f"Task {handle.id} did not reach a terminal state within {deadline:g}s",
                steps=("Started remote task", "Timed out waiting for results"),
            )

        # A terminal task needs no stop command.
        self._watchdog.disarm(timer, run_id=run_id)

        if snapshot.state is TaskState.ERROR:
            error_message = snapshot.error_message or "Remote task failed"
            self._logger.error("remote_task_errored", run_id=run_id, task_id=handle.id, error=error_message)
            return self._failed(
                tracker,
                message=error_message,
                details=error_message,
                steps=("Started remote task", "Encountered an error"),
            )

        tracker.emit(ProgressStatus.PROCESSING, tracker.percent_of(deadline), "Processing task results...")
        outcome = classifier.classify(snapshot.raw_payload, context)
        self._logger.info(
            "remote_task_finished",
            run_id=run_id,
            task_id=handle.id,
            status=outcome.status.value,
            steps=len(outcome.steps),
            obstacles=len(outcome.obstacles),
        )
        tracker.finish(ProgressStatus.DONE, outcome.message)
        return outcome

    @staticmethod
    def _failed(
        tracker: ProgressTracker,
        *,
        message: str,
        details: str,
        steps: tuple[str, ...],
    ) -> StructuredOutcome:
        outcome = StructuredOutcome(
            status=OutcomeStatus.FAILED,
            message=message,
            details=details,
            steps=steps,
            obstacles=(message,),
        )
        tracker.finish(ProgressStatus.ERROR, message)
        return outcome


def rejected_outcome(
    message: str,
    *,
    on_update: ProgressObserver | None = None,
    step: str = "Request was rejected before the task started",
    logger: LoggerPort | None = None,
) -> StructuredOutcome:
    """Failed outcome for a request that never reaches the worker."""
    if on_update is not None:
        update = ProgressUpdate(
            status=ProgressStatus.ERROR,
            progress_percent=100,
            elapsed_seconds=0,
            message=message,
        )
        try:
            on_update(update)
        except Exception as exc:
            if logger is not None:
                logger.warning("progress_observer_failed", status=update.status.value, error=str(exc))
    return StructuredOutcome(
        status=OutcomeStatus.FAILED,
        message=message,
        details=message,
        steps=(step,),
        obstacles=(message,),
    )
