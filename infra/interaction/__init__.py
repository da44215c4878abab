from .console_progress_printer import ConsoleProgressPrinter

__all__ = ["ConsoleProgressPrinter"]
