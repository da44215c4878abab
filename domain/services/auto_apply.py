from __future__ import annotations

from domain.models import ClassificationContext, JobPostingRef, StructuredOutcome, UserProfile
from domain.ports import LoggerPort, ProgressObserver
from domain.prompts import APPLY_SYSTEM_PROMPT, build_apply_task_prompt
from domain.services.classification_rules import APPLICATION_RULES
from domain.services.classifier import ResultClassifier
from domain.services.orchestration import RemoteTaskOrchestrator, rejected_outcome

DEFAULT_APPLY_DEADLINE_SECONDS = 180.0


class AutoApplyService:
    """Delegates one job application to the remote worker."""

    def __init__(
        self,
        *,
        orchestrator: RemoteTaskOrchestrator,
        logger: LoggerPort,
        default_deadline: float = DEFAULT_APPLY_DEADLINE_SECONDS,
    ) -> None:
        self._orchestrator = orchestrator
        self._logger = logger
        self._default_deadline = default_deadline
        self._classifier = ResultClassifier(APPLICATION_RULES, logger=logger)

    async def apply_to_job(
        self,
        *,
        job: JobPostingRef,
        profile: UserProfile,
        resume_text: str | None = None,
        resume_pdf_available: bool = False,
        api_key: str | None = None,
        deadline: float | None = None,
        on_update: ProgressObserver | None = None,
    ) -> StructuredOutcome:
        if not job.job_url or not job.job_url.strip():
            return rejected_outcome(
                "Job application URL is required", on_update=on_update, logger=self._logger
            )
        if not (resume_text and resume_text.strip()) and not resume_pdf_available:
            return rejected_outcome(
                "Resume data is required for auto-applying", on_update=on_update, logger=self._logger
            )

        self._logger.info(
            "auto_apply_requested",
            company_name=job.company_name,
            job_title=job.job_title,
            job_url=job.job_url,
        )
        return await self._orchestrator.run(
            build_apply_task_prompt(job=job, profile=profile, resume_text=resume_text),
            api_key,
            deadline=deadline or self._default_deadline,
            context=ClassificationContext(title=job.job_title, target=job.company_name),
            on_update=on_update,
            system_prompt=APPLY_SYSTEM_PROMPT,
            classifier=self._classifier,
        )
