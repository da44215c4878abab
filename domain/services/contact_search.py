from __future__ import annotations

from domain.models import ClassificationContext, StructuredOutcome
from domain.ports import LoggerPort, ProgressObserver
from domain.prompts import CONTACT_SEARCH_SYSTEM_PROMPT, build_contact_search_task_prompt
from domain.services.classification_rules import CONTACT_SEARCH_RULES
from domain.services.classifier import ResultClassifier
from domain.services.orchestration import RemoteTaskOrchestrator, rejected_outcome

DEFAULT_CONTACT_SEARCH_DEADLINE_SECONDS = 180.0
CONTACT_SEARCH_TITLE = "HR contacts"


class ContactSearchService:
    """Asks the remote worker to find HR contacts for a company."""

    def __init__(
        self,
        *,
        orchestrator: RemoteTaskOrchestrator,
        logger: LoggerPort,
        default_deadline: float = DEFAULT_CONTACT_SEARCH_DEADLINE_SECONDS,
    ) -> None:
        self._orchestrator = orchestrator
        self._logger = logger
        self._default_deadline = default_deadline
        self._classifier = ResultClassifier(CONTACT_SEARCH_RULES, logger=logger)

    async def find_hr_contacts(
        self,
        company: str,
        *,
        api_key: str | None = None,
        deadline: float | None = None,
        on_update: ProgressObserver | None = None,
    ) -> StructuredOutcome:
        company = (company or "").strip()
        if not company:
            return rejected_outcome("Company name is required", on_update=on_update, logger=self._logger)

        self._logger.info("contact_search_requested", company_name=company)
        return await self._orchestrator.run(
            build_contact_search_task_prompt(company=company),
            api_key,
            deadline=deadline or self._default_deadline,
            context=ClassificationContext(title=CONTACT_SEARCH_TITLE, target=company),
            on_update=on_update,
            system_prompt=CONTACT_SEARCH_SYSTEM_PROMPT,
            classifier=self._classifier,
        )
