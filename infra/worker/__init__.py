from .http_task_worker import HttpTaskWorker

__all__ = ["HttpTaskWorker"]
