"""Application/UI layer package."""

from .facade import DashboardFacade, WorkerConfigView

__all__ = ["DashboardFacade", "WorkerConfigView"]
