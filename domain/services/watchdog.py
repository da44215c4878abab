from __future__ import annotations

import asyncio

from domain.models import TaskHandle, TaskState
from domain.ports import LoggerPort, RemoteTaskWorkerPort


class TaskWatchdog:
    """
    Best-effort cleanup for remote tasks that outlive their ceiling.

    ``arm`` schedules a one-shot check on the running event loop. When it
    fires the task status is queried once and a stop command is sent only
    if the worker still reports the task as running. Nothing raised here
    ever reaches the caller of the orchestration flow.
    """

    def __init__(self, *, worker: RemoteTaskWorkerPort, logger: LoggerPort) -> None:
        self._worker = worker
        self._logger = logger
        self._timers: set[asyncio.Task[bool]] = set()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def arm(
        self,
        handle: TaskHandle,
        max_runtime: float,
        *,
        run_id: str | None = None,
    ) -> asyncio.Task[bool]:
        timer = asyncio.create_task(
            self._fire_after(handle, max_runtime, run_id),
            name=f"watchdog-{handle.id}",
        )
        # The loop keeps only weak references to tasks.
        self._timers.add(timer)
        timer.add_done_callback(self._timers.discard)
        self._logger.info("watchdog_armed", run_id=run_id, task_id=handle.id, max_runtime=max_runtime)
        return timer

    def disarm(self, timer: asyncio.Task[bool], *, run_id: str | None = None) -> None:
        """Cancel a pending timer, e.g. once the task is known to be finished."""
        if timer.done() or timer not in self._timers:
            return
        self._timers.discard(timer)
        timer.cancel()
        self._logger.info("watchdog_disarmed", run_id=run_id, task=timer.get_name())

    async def join(self) -> None:
        """Wait for every armed timer to fire."""
        if self._timers:
            await asyncio.gather(*list(self._timers), return_exceptions=True)

    async def check(self, handle: TaskHandle, *, run_id: str | None = None) -> bool:
        """Stop the task if it is still running. Returns True when a stop was sent."""
        try:
            snapshot = await self._worker.get_task_status(handle.id)
        except Exception as exc:
            self._logger.error(
                "watchdog_status_check_failed",
                run_id=run_id,
                task_id=handle.id,
                error=str(exc),
            )
            return False

        if snapshot.state is not TaskState.RUNNING:
            self._logger.info(
                "watchdog_task_already_finished",
                run_id=run_id,
                task_id=handle.id,
                state=snapshot.state.value,
            )
            return False

        self._logger.warning("watchdog_stopping_task", run_id=run_id, task_id=handle.id)
        try:
            result = await self._worker.stop_task(handle.id)
        except Exception as exc:
            self._logger.error(
                "watchdog_stop_failed",
                run_id=run_id,
                task_id=handle.id,
                error=str(exc),
            )
            return False

        self._logger.info("watchdog_stop_issued", run_id=run_id, task_id=handle.id, result=result)
        return True

    async def _fire_after(self, handle: TaskHandle, max_runtime: float, run_id: str | None) -> bool:
        await asyncio.sleep(max_runtime)
        return await self.check(handle, run_id=run_id)
