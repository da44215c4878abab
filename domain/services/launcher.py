from __future__ import annotations

from typing import Any, Mapping

from domain.errors import LaunchFailure
from domain.models import TaskHandle
from domain.ports import LoggerPort, RemoteTaskWorkerPort
from domain.utils import secret_prefix

_TASK_ID_KEYS = ("task_id", "taskId")


class TaskLauncher:
    """Submits a task description to the worker's start-task endpoint."""

    def __init__(self, *, worker: RemoteTaskWorkerPort, logger: LoggerPort) -> None:
        self._worker = worker
        self._logger = logger

    async def launch(
        self,
        description: str,
        credentials: str | None = None,
        *,
        system_prompt: str | None = None,
        run_id: str | None = None,
    ) -> TaskHandle:
        if not description or not description.strip():
            raise LaunchFailure("Task description is required")

        self._logger.info(
            "remote_task_launching",
            run_id=run_id,
            description_chars=len(description),
            api_key=secret_prefix(credentials),
        )
        response = await self._worker.start_task(
            description,
            system_prompt=system_prompt,
            api_key=credentials.strip() if credentials else None,
        )
        task_id = self._extract_task_id(response)
        if task_id is None:
            self._logger.error("remote_task_launch_missing_id", run_id=run_id)
            raise LaunchFailure("Failed to get task ID from service")

        self._logger.info("remote_task_launched", run_id=run_id, task_id=task_id)
        return TaskHandle(id=task_id)

    @staticmethod
    def _extract_task_id(response: Mapping[str, Any] | None) -> str | None:
        if not isinstance(response, Mapping):
            return None
        for key in _TASK_ID_KEYS:
            value = response.get(key)
            if value is not None and str(value).strip():
                return str(value).strip()
        return None
