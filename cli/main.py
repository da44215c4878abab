from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from app import DashboardFacade
from domain.errors import RemoteTaskError
from domain.models import JobPostingRef, OutcomeStatus, StructuredOutcome
from infra.config import FileSystemConfigProvider
from infra.interaction import ConsoleProgressPrinter
from infra.runtime import StructuredLogger, SystemClock, UuidIdGenerator
from infra.worker import HttpTaskWorker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="job-dashboard-tasks")
    parser.add_argument("--config-dir", default="./config", help="Path to config folder")
    sub = parser.add_subparsers(dest="command", required=True)

    check_p = sub.add_parser("check-config", help="Validate config.json and profile.json")
    check_p.add_argument(
        "--skip-connectivity",
        action="store_true",
        help="Skip the worker reachability check",
    )

    apply_p = sub.add_parser("apply-url", help="Auto-apply to a job through the remote worker")
    apply_p.add_argument("job_url")
    apply_p.add_argument("--company", required=True)
    apply_p.add_argument("--title", required=True)
    apply_p.add_argument("--api-key", default=None)
    apply_p.add_argument("--deadline", type=float, default=None, help="Seconds before giving up")
    apply_p.add_argument(
        "--resume-pdf",
        action="store_true",
        help="The worker already has a resume PDF to upload",
    )

    contacts_p = sub.add_parser("find-contacts", help="Search HR contacts for a company")
    contacts_p.add_argument("company")
    contacts_p.add_argument("--api-key", default=None)
    contacts_p.add_argument("--deadline", type=float, default=None, help="Seconds before giving up")

    status_p = sub.add_parser("task-status", help="Query one remote task")
    status_p.add_argument("task_id")

    stop_p = sub.add_parser("stop-task", help="Stop one remote task")
    stop_p.add_argument("task_id")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_provider = FileSystemConfigProvider(args.config_dir)

    errors = config_provider.validate()
    if errors:
        print("Config validation failed:")
        for err in errors:
            print(f"  - {err}")
        return 1

    logger = StructuredLogger(stream=sys.stderr)
    cfg = config_provider.get_config()
    facade = DashboardFacade(
        config=cfg,
        worker=HttpTaskWorker(base_url=cfg.worker_base_url, timeout=cfg.http_timeout_seconds),
        clock=SystemClock(),
        id_generator=UuidIdGenerator(),
        logger=logger,
    )

    if args.command == "check-config":
        return _handle_check(args, config_provider, facade)

    if args.command == "apply-url":
        return asyncio.run(_handle_apply(args, config_provider, facade))

    if args.command == "find-contacts":
        return asyncio.run(_handle_contacts(args, facade))

    if args.command == "task-status":
        return asyncio.run(_handle_status(args, facade))

    if args.command == "stop-task":
        return asyncio.run(_handle_stop(args, facade))

    raise SystemExit(f"Unsupported command: {args.command}")


def _handle_check(
    args: argparse.Namespace,
    config_provider: FileSystemConfigProvider,
    facade: DashboardFacade,
) -> int:
    view = facade.describe_config()
    profile = config_provider.get_profile()
    print(f"Config OK: worker={view.worker_base_url}, api_key={view.api_key_masked or '-'}")
    print(f"Profile: {profile.full_name} ({profile.email})")
    print(
        f"Deadlines: apply={view.apply_deadline_seconds:g}s, "
        f"contacts={view.contact_search_deadline_seconds:g}s, "
        f"poll every {view.poll_interval_seconds:g}s"
    )

    if args.skip_connectivity:
        print("Skipping connectivity check (--skip-connectivity)")
        return 0

    print("Verifying worker connectivity...")
    result = asyncio.run(config_provider.validate_connectivity())
    if not result.ok:
        print("Connectivity check failed:")
        for err in result.errors:
            print(f"  - {err}")
        return 1
    print(f"Worker reachable at {result.worker_url}")
    return 0


async def _handle_apply(
    args: argparse.Namespace,
    config_provider: FileSystemConfigProvider,
    facade: DashboardFacade,
) -> int:
    printer = ConsoleProgressPrinter()
    outcome = await facade.auto_apply(
        JobPostingRef(company_name=args.company, job_title=args.title, job_url=args.job_url),
        config_provider.get_profile(),
        resume_text=config_provider.get_resume_text(),
        resume_pdf_available=args.resume_pdf,
        api_key=args.api_key,
        deadline=args.deadline,
        on_update=printer,
    )
    return await _finish(facade, printer, outcome)


async def _handle_contacts(args: argparse.Namespace, facade: DashboardFacade) -> int:
    printer = ConsoleProgressPrinter()
    outcome = await facade.find_hr_contacts(
        args.company,
        api_key=args.api_key,
        deadline=args.deadline,
        on_update=printer,
    )
    return await _finish(facade, printer, outcome)


async def _finish(
    facade: DashboardFacade,
    printer: ConsoleProgressPrinter,
    outcome: StructuredOutcome,
) -> int:
    printer.print_outcome(outcome)
    if outcome.status is not OutcomeStatus.FAILED:
        return 0
    if facade.pending_watchdogs:
        # The remote task may still be running; let the watchdog stop it.
        print("Waiting for the watchdog to check the remote task...")
        await facade.wait_for_watchdogs()
    return 1


async def _handle_status(args: argparse.Namespace, facade: DashboardFacade) -> int:
    try:
        snapshot = await facade.task_status(args.task_id)
    except RemoteTaskError as exc:
        print(f"error={exc}")
        return 1
    print(f"state={snapshot.state.value}")
    if snapshot.error_message:
        print(f"message={snapshot.error_message}")
    if snapshot.raw_payload is not None:
        print(f"result={snapshot.raw_payload}")
    return 0


async def _handle_stop(args: argparse.Namespace, facade: DashboardFacade) -> int:
    try:
        await facade.stop_task(args.task_id)
    except RemoteTaskError as exc:
        print(f"error={exc}")
        return 1
    print(f"stop requested for {args.task_id}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
