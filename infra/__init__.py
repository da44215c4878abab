"""Infrastructure adapters – concrete implementations of domain ports."""

from .config import ConnectivityResult, FileSystemConfigProvider
from .interaction import ConsoleProgressPrinter
from .runtime import StructuredLogger, SystemClock, UuidIdGenerator
from .worker import HttpTaskWorker

__all__ = [
    "FileSystemConfigProvider",
    "ConnectivityResult",
    "ConsoleProgressPrinter",
    "HttpTaskWorker",
    "SystemClock",
    "UuidIdGenerator",
    "StructuredLogger",
]
