"""
Reusable fakes and in-memory implementations for tests.
"""

from .fake_config_provider import InMemoryConfigProvider
from .fake_runtime import FixedClock, InMemoryLogger, SequentialIdGenerator
from .progress_recorder import ProgressRecorder
from .scripted_task_worker import ScriptedTaskWorker, completed, errored, running

__all__ = [
    "InMemoryConfigProvider",
    "FixedClock",
    "SequentialIdGenerator",
    "InMemoryLogger",
    "ProgressRecorder",
    "ScriptedTaskWorker",
    "running",
    "completed",
    "errored",
]
