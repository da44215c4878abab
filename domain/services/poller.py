from __future__ import annotations

import asyncio

from domain.errors import PollTimeout, TransientPollError
from domain.models import ProgressStatus, ProgressUpdate, StatusSnapshot, TaskHandle
from domain.ports import ClockPort, LoggerPort, ProgressObserver, RemoteTaskWorkerPort


class StatusPoller:
    """
    Polls the worker's task-status endpoint until a terminal snapshot arrives.

    Every suspension (status query or sleep) is clipped to the time left
    before the deadline, so the call returns no later than one interval
    after the deadline even when the worker hangs.
    """

    def __init__(
        self,
        *,
        worker: RemoteTaskWorkerPort,
        clock: ClockPort,
        logger: LoggerPort,
    ) -> None:
        self._worker = worker
        self._clock = clock
        self._logger = logger

    async def poll_until_terminal(
        self,
        handle: TaskHandle,
        *,
        interval: float,
        deadline: float,
        on_update: ProgressObserver | None = None,
        run_id: str | None = None,
    ) -> StatusSnapshot:
        if interval <= 0:
            raise ValueError("interval must be positive")
        if deadline <= 0:
            raise ValueError("deadline must be positive")

        started = self._clock.monotonic()
        attempt = 0
        while True:
            elapsed = self._clock.monotonic() - started
            if elapsed >= deadline:
                break
            attempt += 1

            if on_update is not None:
                seconds = int(round(elapsed))
                on_update(
                    ProgressUpdate(
                        status=ProgressStatus.POLLING,
                        progress_percent=min(99, int(round(100 * elapsed / deadline))),
                        elapsed_seconds=seconds,
                        message=f"Checking task status ({seconds}s elapsed)",
                    )
                )

            snapshot = await self._query(handle, deadline - elapsed, attempt, run_id)
            if snapshot is not None and snapshot.state.is_terminal:
                self._logger.info(
                    "status_poll_terminal",
                    run_id=run_id,
                    task_id=handle.id,
                    state=snapshot.state.value,
                    attempts=attempt,
                )
                return snapshot

            remaining = deadline - (self._clock.monotonic() - started)
            if remaining <= 0:
                break
            await asyncio.sleep(min(interval, remaining))

        self._logger.warning(
            "status_poll_timed_out",
            run_id=run_id,
            task_id=handle.id,
            deadline=deadline,
            attempts=attempt,
        )
        raise PollTimeout(deadline)

    async def _query(
        self,
        handle: TaskHandle,
        remaining: float,
        attempt: int,
        run_id: str | None,
    ) -> StatusSnapshot | None:
        try:
            return await asyncio.wait_for(
                self._worker.get_task_status(handle.id),
                timeout=max(remaining, 0.001),
            )
        except (TransientPollError, asyncio.TimeoutError) as exc:
            # A failed query only means "not terminal yet".
            self._logger.warning(
                "status_poll_failed",
                run_id=run_id,
                task_id=handle.id,
                attempt=attempt,
                error=str(exc) or type(exc).__name__,
            )
            return None
