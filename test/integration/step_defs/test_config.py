"""Step definitions for config validation BDD scenarios."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from unittest.mock import patch

from pytest_bdd import given, when, then, scenarios, parsers

from infra.config import FileSystemConfigProvider

from ..conftest import StubWorkerState

scenarios("../features/config_validation.feature")


def _valid_config() -> dict:
    return {
        "WORKER_BASE_URL": "https://worker.example.com",
        "GEMINI_API_KEY": "gk-abc12345678",
    }


def _valid_profile() -> dict:
    return {"name": "Jane", "email": "jane@test.com"}


def _place_files(base: Path, *, config: bool = True, profile: bool = True) -> None:
    if config:
        (base / "config.json").write_text(json.dumps(_valid_config()))
    if profile:
        (base / "profile.json").write_text(json.dumps(_valid_profile()))


def _with_config(base: Path, **values: object) -> dict:
    _place_files(base)
    cfg = _valid_config()
    cfg.update(values)
    (base / "config.json").write_text(json.dumps(cfg))
    return {"tmp_path": base, "errors": []}


@given("a complete config folder with all required files", target_fixture="config_ctx")
def given_complete(tmp_path: Path) -> dict:
    _place_files(tmp_path)
    return {"tmp_path": tmp_path, "errors": []}


@given("a config folder without config.json", target_fixture="config_ctx")
def given_no_config_json(tmp_path: Path) -> dict:
    _place_files(tmp_path, config=False)
    return {"tmp_path": tmp_path, "errors": []}


@given("a config folder without profile.json", target_fixture="config_ctx")
def given_no_profile(tmp_path: Path) -> dict:
    _place_files(tmp_path, profile=False)
    return {"tmp_path": tmp_path, "errors": []}


@given("a config folder with invalid JSON in config.json", target_fixture="config_ctx")
def given_invalid_json(tmp_path: Path) -> dict:
    _place_files(tmp_path)
    (tmp_path / "config.json").write_text("{bad")
    return {"tmp_path": tmp_path, "errors": []}


@given(
    parsers.parse('a config folder with config.json missing "{key}"'),
    target_fixture="config_ctx",
)
def given_missing_key(tmp_path: Path, key: str) -> dict:
    cfg = _valid_config()
    del cfg[key]
    _place_files(tmp_path)
    (tmp_path / "config.json").write_text(json.dumps(cfg))
    return {"tmp_path": tmp_path, "errors": []}


@given(
    parsers.parse('a config folder with GEMINI_API_KEY set to "{value}"'),
    target_fixture="config_ctx",
)
def given_placeholder_key(tmp_path: Path, value: str) -> dict:
    return _with_config(tmp_path, GEMINI_API_KEY=value)


@given(
    parsers.parse("a config folder with POLL_INTERVAL_SECONDS set to {value:d}"),
    target_fixture="config_ctx",
)
def given_long_interval(tmp_path: Path, value: int) -> dict:
    return _with_config(tmp_path, POLL_INTERVAL_SECONDS=value)


@given(
    parsers.parse('a config folder with profile email set to "{value}"'),
    target_fixture="config_ctx",
)
def given_placeholder_email(tmp_path: Path, value: str) -> dict:
    _place_files(tmp_path)
    profile = _valid_profile()
    profile["email"] = value
    (tmp_path / "profile.json").write_text(json.dumps(profile))
    return {"tmp_path": tmp_path, "errors": []}


@when("the config is validated")
def when_validate(config_ctx: dict) -> None:
    provider = FileSystemConfigProvider(str(config_ctx["tmp_path"]))
    config_ctx["errors"] = provider.validate()


@then("validation passes with no errors")
def then_no_errors(config_ctx: dict) -> None:
    assert config_ctx["errors"] == []


@then(parsers.parse('validation reports an error containing "{text}"'))
def then_error_contains(config_ctx: dict, text: str) -> None:
    assert any(text in e for e in config_ctx["errors"]), (
        f"Expected error containing '{text}', got: {config_ctx['errors']}"
    )


# -- connectivity validation steps -----------------------------------------


@given("a valid config pointing at a running worker", target_fixture="config_ctx")
def given_config_for_stub_worker(tmp_path: Path, stub_worker: tuple[str, StubWorkerState]) -> dict:
    base_url, _ = stub_worker
    return {**_with_config(tmp_path, WORKER_BASE_URL=base_url), "conn_result": None}


@given("a valid config with working API keys", target_fixture="config_ctx")
def given_valid_config_for_connectivity(tmp_path: Path) -> dict:
    _place_files(tmp_path)
    return {"tmp_path": tmp_path, "errors": [], "conn_result": None}


@when("connectivity is validated")
def when_connectivity(config_ctx: dict) -> None:
    provider = FileSystemConfigProvider(str(config_ctx["tmp_path"]))
    config_ctx["conn_result"] = asyncio.run(provider.validate_connectivity())


@when("connectivity is validated with the worker unreachable")
def when_connectivity_unreachable(config_ctx: dict) -> None:
    provider = FileSystemConfigProvider(str(config_ctx["tmp_path"]))

    with patch.object(
        FileSystemConfigProvider, "_check_worker",
        return_value="Worker at https://worker.example.com is unreachable: [Errno 111] Connection refused",
    ):
        result = asyncio.run(provider.validate_connectivity())
        config_ctx["conn_result"] = result
        config_ctx["errors"] = result.errors


@then("connectivity passes")
def then_connectivity_ok(config_ctx: dict) -> None:
    assert config_ctx["conn_result"].ok


@then(parsers.parse('connectivity reports an error containing "{text}"'))
def then_connectivity_error(config_ctx: dict, text: str) -> None:
    assert any(text in e for e in config_ctx["conn_result"].errors), (
        f"Expected connectivity error containing '{text}', got: {config_ctx['conn_result'].errors}"
    )
