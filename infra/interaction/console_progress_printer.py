from __future__ import annotations

import sys
from typing import TextIO

from domain.models import ProgressUpdate, StructuredOutcome


class ConsoleProgressPrinter:
    """Prints progress updates and the final outcome to a text stream.

    Instances are callable so they can be passed straight in as the
    ``on_update`` observer.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, update: ProgressUpdate) -> None:
        message = update.message or ""
        self._print(
            f"[{update.progress_percent:3d}%] {update.status.value:<10} "
            f"{update.elapsed_seconds:4d}s  {message}".rstrip()
        )

    def print_outcome(self, outcome: StructuredOutcome) -> None:
        self._print(f"status={outcome.status.value}")
        self._print(f"message={outcome.message}")
        for name, value in sorted(outcome.flags.items()):
            self._print(f"{name}={'yes' if value else 'no'}")
        self._print("steps:")
        for idx, step in enumerate(outcome.steps, start=1):
            self._print(f"  {idx}. {step}")
        if outcome.obstacles:
            self._print("obstacles:")
            for obstacle in outcome.obstacles:
                self._print(f"  - {obstacle}")

    def _print(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout)
