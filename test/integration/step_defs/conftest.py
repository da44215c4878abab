"""Shared fixtures and context for BDD step definitions."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from app import DashboardFacade
from domain.models import JobPostingRef, StructuredOutcome, UserProfile, WorkerConfig
from infra.runtime import SystemClock, UuidIdGenerator
from infra.worker import HttpTaskWorker
from test.mocks import InMemoryLogger, ProgressRecorder

from ..conftest import StubWorkerState


@dataclass
class FlowContext:
    """Holds mutable state shared across BDD steps."""

    base_url: str
    worker_state: StubWorkerState
    logger: InMemoryLogger = field(default_factory=InMemoryLogger)
    recorder: ProgressRecorder = field(default_factory=ProgressRecorder)
    profile: UserProfile = field(
        default_factory=lambda: UserProfile(full_name="Jane Doe", email="jane@example.com"),
    )
    outcome: StructuredOutcome | None = None

    def facade(self) -> DashboardFacade:
        config = WorkerConfig(
            worker_base_url=self.base_url,
            api_key="gk-integration",
            poll_interval_seconds=0.05,
            apply_deadline_seconds=5,
            contact_search_deadline_seconds=5,
            http_timeout_seconds=2,
        )
        return DashboardFacade(
            config=config,
            worker=HttpTaskWorker(base_url=config.worker_base_url, timeout=config.http_timeout_seconds),
            clock=SystemClock(),
            id_generator=UuidIdGenerator(),
            logger=self.logger,
        )


@pytest.fixture()
def flow(stub_worker: tuple[str, StubWorkerState]) -> FlowContext:
    base_url, state = stub_worker
    return FlowContext(base_url=base_url, worker_state=state)


def run_apply(
    flow: FlowContext,
    *,
    company: str,
    title: str,
    deadline: float | None = None,
    wait_for_watchdog: bool = False,
) -> None:
    """Run one auto-apply call against the stub worker synchronously for tests."""
    facade = flow.facade()
    job = JobPostingRef(
        company_name=company,
        job_title=title,
        job_url=f"https://{company.lower().replace(' ', '-')}.test/apply",
    )

    async def _apply() -> StructuredOutcome:
        outcome = await facade.auto_apply(
            job,
            flow.profile,
            resume_text="Eight years of backend development",
            deadline=deadline,
            on_update=flow.recorder,
        )
        if wait_for_watchdog:
            await facade.wait_for_watchdogs()
        return outcome

    flow.outcome = asyncio.run(_apply())


def run_contact_search(flow: FlowContext, *, company: str) -> None:
    facade = flow.facade()
    flow.outcome = asyncio.run(facade.find_hr_contacts(company, on_update=flow.recorder))
