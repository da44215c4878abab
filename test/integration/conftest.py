from __future__ import annotations

import http.server
import json
import threading
from dataclasses import dataclass, field
from typing import Any, Generator

import pytest


@dataclass
class StubWorkerState:
    """Scripted behaviour of the local stub worker, shared with its handler threads."""

    task_id: str = "task-1"
    start_status: int = 200
    statuses: list[dict[str, Any]] = field(default_factory=lambda: [{"status": "running"}])
    start_requests: list[dict[str, Any]] = field(default_factory=list)
    status_requests: list[str] = field(default_factory=list)
    stop_requests: list[dict[str, Any]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def next_status(self, task_id: str) -> dict[str, Any]:
        with self.lock:
            index = len(self.status_requests)
            self.status_requests.append(task_id)
            return self.statuses[min(index, len(self.statuses) - 1)]


class _StubWorkerHandler(http.server.BaseHTTPRequestHandler):
    server: "_StubWorkerServer"

    def do_GET(self) -> None:  # noqa: N802
        prefix = "/task-status/"
        if not self.path.startswith(prefix):
            self._reply(404, {"error": "not found"})
            return
        self._reply(200, self.server.state.next_status(self.path[len(prefix):]))

    def do_POST(self) -> None:  # noqa: N802
        state = self.server.state
        body = self._read_body()
        if self.path == "/run-task":
            with state.lock:
                state.start_requests.append(body)
            if state.start_status != 200:
                self._reply(state.start_status, {"error": "worker unavailable"})
                return
            self._reply(200, {"task_id": state.task_id})
        elif self.path == "/stop-task":
            with state.lock:
                state.stop_requests.append(body)
            self._reply(200, {"stopped": True})
        else:
            self._reply(404, {"error": "not found"})

    def log_message(self, *_args: object) -> None:
        pass

    def _read_body(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        return json.loads(raw) if raw else {}

    def _reply(self, code: int, payload: dict[str, Any]) -> None:
        data = json.dumps(payload).encode("utf-8")
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)


class _StubWorkerServer(http.server.ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, state: StubWorkerState) -> None:
        super().__init__(("127.0.0.1", 0), _StubWorkerHandler)
        self.state = state


@pytest.fixture()
def stub_worker() -> Generator[tuple[str, StubWorkerState], None, None]:
    """Start a local HTTP server that speaks the worker's run/status/stop protocol."""
    state = StubWorkerState()
    server = _StubWorkerServer(state)
    port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{port}", state
    server.shutdown()
    server.server_close()
