"""HTTP adapter for the remote browser-automation worker.

Uses ``urllib.request`` inside ``asyncio.to_thread`` for HTTP calls (no
external HTTP library needed), matching the pattern used elsewhere in the
codebase.
"""

from __future__ import annotations

import asyncio
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from domain.errors import LaunchFailure, TransientPollError, WatchdogError
from domain.models import StatusSnapshot, TaskState

_ERROR_STATES = {"error", "failed"}


class HttpTaskWorker:
    """Implements ``RemoteTaskWorkerPort`` against the worker's run/status/stop endpoints."""

    def __init__(self, *, base_url: str, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def start_task(
        self,
        description: str,
        *,
        system_prompt: str | None = None,
        api_key: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"task": description}
        if system_prompt:
            payload["system_prompt"] = system_prompt
        if api_key:
            payload["api_key"] = api_key

        try:
            data = await asyncio.to_thread(self._request_json, "POST", "/run-task", payload)
        except urllib.error.HTTPError as exc:
            raise LaunchFailure(f"Remote task failed to start: {_describe_http_error(exc)}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise LaunchFailure(f"Remote task failed to start: {exc}") from exc
        return data if isinstance(data, dict) else {}

    async def get_task_status(self, task_id: str) -> StatusSnapshot:
        path = f"/task-status/{urllib.parse.quote(task_id, safe='')}"
        try:
            data = await asyncio.to_thread(self._request_json, "GET", path)
        except urllib.error.HTTPError as exc:
            raise TransientPollError(f"Failed to get task status: {_describe_http_error(exc)}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise TransientPollError(f"Failed to get task status: {exc}") from exc
        if not isinstance(data, dict):
            raise TransientPollError(f"Unexpected task status payload: {data!r}")
        return self._to_snapshot(data)

    async def stop_task(self, task_id: str) -> dict[str, Any]:
        try:
            data = await asyncio.to_thread(self._request_json, "POST", "/stop-task", {"task_id": task_id})
        except urllib.error.HTTPError as exc:
            raise WatchdogError(f"Failed to stop task: {_describe_http_error(exc)}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise WatchdogError(f"Failed to stop task: {exc}") from exc
        return data if isinstance(data, dict) else {"response": data}

    # -- internal helpers ---------------------------------------------------

    def _request_json(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(url, data=body, method=method)
        req.add_header("Accept", "application/json")
        if body is not None:
            req.add_header("Content-Type", "application/json")
        with urllib.request.urlopen(req, timeout=self._timeout) as resp:  # nosec B310
            raw = resp.read().decode("utf-8")
        return json.loads(raw) if raw.strip() else {}

    @staticmethod
    def _to_snapshot(data: dict[str, Any]) -> StatusSnapshot:
        state = str(data.get("status", "")).strip().lower()

        if state == TaskState.COMPLETED.value:
            payload = data.get("results") or data.get("result")
            if payload is None or payload == "":
                # Completed without a result field: classify whatever came back.
                payload = {key: value for key, value in data.items() if key != "status"}
            return StatusSnapshot(state=TaskState.COMPLETED, raw_payload=payload)

        if state in _ERROR_STATES:
            message = data.get("message") or data.get("error") or "Remote task failed"
            return StatusSnapshot(state=TaskState.ERROR, error_message=str(message))

        # "running", "pending", "queued" and anything unknown keep the poll going.
        return StatusSnapshot(state=TaskState.RUNNING)


def _describe_http_error(exc: urllib.error.HTTPError) -> str:
    """The ``error`` text of a JSON error body when the worker sent one, else code and reason."""
    if exc.fp is None:
        return f"{exc.code} {exc.reason}"
    try:
        body = json.loads(exc.read().decode("utf-8") or "null")
    except (OSError, ValueError):
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"{exc.code} {exc.reason}"
