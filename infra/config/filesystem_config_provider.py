from __future__ import annotations

import asyncio
import json
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.models import UserProfile, WorkerConfig


@dataclass(frozen=True)
class ConnectivityResult:
    """Outcome of validate_connectivity(): errors list plus the probed URL."""

    errors: list[str]
    worker_url: str | None = None

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0


_REQUIRED_CONFIG_KEYS = {"WORKER_BASE_URL"}
_REQUIRED_PROFILE_KEYS = {"name", "email"}
_PLACEHOLDER_PATTERN = re.compile(r"^YOUR_", re.IGNORECASE)
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{7,}$")

_NUMERIC_DEFAULTS = {
    "POLL_INTERVAL_SECONDS": 3.0,
    "APPLY_DEADLINE_SECONDS": 180.0,
    "CONTACT_SEARCH_DEADLINE_SECONDS": 180.0,
    "HTTP_TIMEOUT_SECONDS": 30.0,
}


class FileSystemConfigProvider:
    """Reads config.json and profile.json from a config directory.

    Every public method re-reads from disk so that edits
    to the JSON files take effect without restarting the app.
    """

    def __init__(self, config_dir: str) -> None:
        self._config_dir = Path(config_dir)

    def validate(self) -> list[str]:
        errors: list[str] = []
        config_path = self._config_dir / "config.json"
        profile_path = self._config_dir / "profile.json"

        config_data = self._validate_json_file(config_path, _REQUIRED_CONFIG_KEYS, errors)
        profile_data = self._validate_json_file(profile_path, _REQUIRED_PROFILE_KEYS, errors)

        if config_data is not None:
            errors.extend(self._validate_config_formats(config_data))
        if profile_data is not None:
            errors.extend(self._validate_profile_formats(profile_data))
        return errors

    @staticmethod
    def _validate_config_formats(data: dict) -> list[str]:
        errors: list[str] = []
        base_url = str(data.get("WORKER_BASE_URL", ""))
        if not base_url.startswith(("http://", "https://")):
            errors.append("WORKER_BASE_URL must start with 'http://' or 'https://'.")

        api_key = data.get("GEMINI_API_KEY")
        if api_key is not None:
            if not isinstance(api_key, str) or not api_key.strip():
                errors.append("GEMINI_API_KEY must be a non-empty string when present.")
            elif _PLACEHOLDER_PATTERN.search(api_key) or "YOUR" in api_key.upper():
                errors.append("GEMINI_API_KEY is a placeholder. Set your real API key or remove it.")

        numbers: dict[str, float] = {}
        for key in _NUMERIC_DEFAULTS:
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(f"{key} must be a positive number of seconds.")
            else:
                numbers[key] = float(value)

        interval = numbers.get("POLL_INTERVAL_SECONDS", _NUMERIC_DEFAULTS["POLL_INTERVAL_SECONDS"])
        for key in ("APPLY_DEADLINE_SECONDS", "CONTACT_SEARCH_DEADLINE_SECONDS"):
            deadline = numbers.get(key, _NUMERIC_DEFAULTS[key])
            if interval >= deadline:
                errors.append(f"POLL_INTERVAL_SECONDS must be smaller than {key}.")
        return errors

    @staticmethod
    def _validate_profile_formats(data: dict) -> list[str]:
        errors: list[str] = []
        name = data.get("name", "")
        if not name or name == "Your Full Name":
            errors.append("profile.json: name is a placeholder. Enter your real name.")

        email = data.get("email", "")
        if not _EMAIL_PATTERN.match(str(email)):
            errors.append(f"profile.json: email '{email}' is not a valid email address.")
        elif email == "your@email.com":
            errors.append("profile.json: email is a placeholder. Enter your real email.")

        phone = data.get("phone")
        if phone is not None and not _PHONE_PATTERN.match(str(phone)):
            errors.append(f"profile.json: phone '{phone}' is not a valid phone number.")

        resume_text = data.get("resume_text")
        if resume_text is not None and not isinstance(resume_text, str):
            errors.append("profile.json: resume_text must be a string.")

        return errors

    async def validate_connectivity(self) -> ConnectivityResult:
        """Verify the worker tunnel answers HTTP at all."""
        config = self.get_config()
        error = await asyncio.to_thread(
            self._check_worker, config.worker_base_url, config.http_timeout_seconds,
        )
        return ConnectivityResult(
            errors=[error] if error else [],
            worker_url=config.worker_base_url,
        )

    @staticmethod
    def _check_worker(base_url: str, timeout: float) -> str | None:
        try:
            req = urllib.request.Request(base_url, method="GET")
            with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
                resp.read()
            return None
        except urllib.error.HTTPError:
            # Any HTTP answer means the tunnel is up; the root path may 404.
            return None
        except Exception as exc:
            return f"Worker at {base_url} is unreachable: {exc}"

    def get_config(self) -> WorkerConfig:
        data = self._read_json("config.json")
        api_key = data.get("GEMINI_API_KEY")
        return WorkerConfig(
            worker_base_url=data["WORKER_BASE_URL"],
            api_key=api_key.strip() if isinstance(api_key, str) and api_key.strip() else None,
            poll_interval_seconds=self._number(data, "POLL_INTERVAL_SECONDS"),
            apply_deadline_seconds=self._number(data, "APPLY_DEADLINE_SECONDS"),
            contact_search_deadline_seconds=self._number(data, "CONTACT_SEARCH_DEADLINE_SECONDS"),
            http_timeout_seconds=self._number(data, "HTTP_TIMEOUT_SECONDS"),
        )

    def get_profile(self) -> UserProfile:
        data = self._read_json("profile.json")
        return UserProfile(
            full_name=data["name"],
            email=data["email"],
            phone=data.get("phone"),
            location=data.get("location"),
        )

    def get_resume_text(self) -> str | None:
        text = self._read_json("profile.json").get("resume_text")
        return text if isinstance(text, str) and text.strip() else None

    # -- internal helpers ---------------------------------------------------

    def _read_json(self, filename: str) -> dict:
        path = self._config_dir / filename
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _number(data: dict[str, Any], key: str) -> float:
        return float(data.get(key, _NUMERIC_DEFAULTS[key]))

    @staticmethod
    def _validate_json_file(
        path: Path,
        required_keys: set[str],
        errors: list[str],
    ) -> dict | None:
        """Validate a JSON file exists and has required keys.

        Returns the parsed dict on success, or None if the file
        is missing or unparseable.
        """
        if not path.is_file():
            errors.append(f"Missing file: {path}")
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            errors.append(f"Cannot read {path}: {exc}")
            return None
        if not isinstance(data, dict):
            errors.append(f"{path.name} must contain a JSON object")
            return None
        missing = required_keys - set(data.keys())
        if missing:
            errors.append(f"{path.name} missing keys: {', '.join(sorted(missing))}")
            return None
        return data
