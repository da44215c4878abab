from __future__ import annotations

from dataclasses import dataclass

from domain.models import JobPostingRef, StatusSnapshot, StructuredOutcome, UserProfile, WorkerConfig
from domain.ports import (
    ClockPort,
    IdGeneratorPort,
    LoggerPort,
    ProgressObserver,
    RemoteTaskWorkerPort,
)
from domain.services import AutoApplyService, ContactSearchService, RemoteTaskOrchestrator


@dataclass(frozen=True)
class WorkerConfigView:
    worker_base_url: str
    api_key_masked: str
    poll_interval_seconds: float
    apply_deadline_seconds: float
    contact_search_deadline_seconds: float


class DashboardFacade:
    """
    UI-facing facade for the dashboard's "auto apply" and "find HR contacts"
    actions, plus manual status and stop controls.

    The configured API key is used only when the caller does not pass one.
    """

    def __init__(
        self,
        *,
        config: WorkerConfig,
        worker: RemoteTaskWorkerPort,
        clock: ClockPort,
        id_generator: IdGeneratorPort,
        logger: LoggerPort,
    ) -> None:
        self._config = config
        self._worker = worker
        self._logger = logger
        self._orchestrator = RemoteTaskOrchestrator.for_worker(
            worker,
            clock=clock,
            id_generator=id_generator,
            logger=logger,
            poll_interval=config.poll_interval_seconds,
        )
        self._auto_apply = AutoApplyService(
            orchestrator=self._orchestrator,
            logger=logger,
            default_deadline=config.apply_deadline_seconds,
        )
        self._contact_search = ContactSearchService(
            orchestrator=self._orchestrator,
            logger=logger,
            default_deadline=config.contact_search_deadline_seconds,
        )

    async def auto_apply(
        self,
        job: JobPostingRef,
        profile: UserProfile,
        *,
        resume_text: str | None = None,
        resume_pdf_available: bool = False,
        api_key: str | None = None,
        deadline: float | None = None,
        on_update: ProgressObserver | None = None,
    ) -> StructuredOutcome:
        return await self._auto_apply.apply_to_job(
            job=job,
            profile=profile,
            resume_text=resume_text,
            resume_pdf_available=resume_pdf_available,
            api_key=api_key or self._config.api_key,
            deadline=deadline,
            on_update=on_update,
        )

    async def find_hr_contacts(
        self,
        company: str,
        *,
        api_key: str | None = None,
        deadline: float | None = None,
        on_update: ProgressObserver | None = None,
    ) -> StructuredOutcome:
        return await self._contact_search.find_hr_contacts(
            company,
            api_key=api_key or self._config.api_key,
            deadline=deadline,
            on_update=on_update,
        )

    async def task_status(self, task_id: str) -> StatusSnapshot:
        return await self._worker.get_task_status(task_id)

    async def stop_task(self, task_id: str) -> None:
        self._logger.info("manual_stop_requested", task_id=task_id)
        await self._worker.stop_task(task_id)

    @property
    def pending_watchdogs(self) -> int:
        return self._orchestrator.watchdog.pending

    async def wait_for_watchdogs(self) -> None:
        await self._orchestrator.watchdog.join()

    def describe_config(self) -> WorkerConfigView:
        return WorkerConfigView(
            worker_base_url=self._config.worker_base_url,
            api_key_masked=self._mask_secret(self._config.api_key or ""),
            poll_interval_seconds=self._config.poll_interval_seconds,
            apply_deadline_seconds=self._config.apply_deadline_seconds,
            contact_search_deadline_seconds=self._config.contact_search_deadline_seconds,
        )

    @staticmethod
    def _mask_secret(value: str) -> str:
        if not value:
            return ""
        if len(value) <= 3:
            return "*" * len(value)
        return value[0] + ("*" * (len(value) - 2)) + value[-1]
