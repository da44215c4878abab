from __future__ import annotations

import json
import re
from typing import Any, Mapping

from domain.errors import ClassificationFailure
from domain.models import ClassificationContext, OutcomeStatus, StructuredOutcome
from domain.ports import LoggerPort
from domain.services.classification_rules import APPLICATION_RULES, KeywordRules

_TEXT_KEYS = ("result", "output", "final_result", "text")
_SENTENCE_BREAK = re.compile(r"[.!?]\s+")
_STEP_BREAK = re.compile(r"\n|\d+\.\s*")


def normalize_report(raw_payload: Any) -> str:
    """Turn the worker's terminal payload into the text that gets classified."""
    if raw_payload is None:
        raise ClassificationFailure("Task finished without a report")
    if isinstance(raw_payload, str):
        return raw_payload
    if isinstance(raw_payload, Mapping):
        for key in _TEXT_KEYS:
            value = raw_payload.get(key)
            if isinstance(value, str) and value:
                return value
    try:
        return json.dumps(raw_payload, default=str)
    except (TypeError, ValueError) as exc:
        raise ClassificationFailure(f"Report cannot be serialised: {exc}") from exc


class ResultClassifier:
    """
    Derives a ``StructuredOutcome`` from an unstructured worker report.

    The verdict depends only on the payload and the keyword table, so the
    same payload always yields an equal outcome. ``classify`` never raises.
    """

    def __init__(
        self,
        rules: KeywordRules = APPLICATION_RULES,
        *,
        logger: LoggerPort | None = None,
    ) -> None:
        self._rules = rules
        self._logger = logger

    @property
    def rules(self) -> KeywordRules:
        return self._rules

    def classify(self, raw_payload: Any, context: ClassificationContext) -> StructuredOutcome:
        try:
            text = normalize_report(raw_payload)
            return self._classify_text(text, context)
        except Exception as exc:
            if self._logger is not None:
                self._logger.warning(
                    "result_classification_failed",
                    error=str(exc),
                    payload_type=type(raw_payload).__name__,
                )
            return self._fallback(raw_payload, exc)

    def _classify_text(self, text: str, context: ClassificationContext) -> StructuredOutcome:
        rules = self._rules
        lowered = text.lower()

        is_success = _any_in(rules.success, lowered)
        is_partial = _any_in(rules.partial, lowered)
        flags = {name: _any_in(phrases, lowered) for name, phrases in rules.flags.items()}

        if is_success:
            status = OutcomeStatus.SUCCESS
        elif is_partial or any(flags.values()):
            status = OutcomeStatus.PARTIAL
        else:
            status = OutcomeStatus.FAILED

        return StructuredOutcome(
            status=status,
            message=rules.message_for(status, context),
            details=text,
            steps=self._extract_steps(text),
            obstacles=self._extract_obstacles(text, lowered),
            flags=flags,
        )

    def _extract_obstacles(self, text: str, lowered: str) -> tuple[str, ...]:
        sentences = [s.strip() for s in _SENTENCE_BREAK.split(text)]
        obstacles: list[str] = []
        for indicator in self._rules.obstacles:
            if indicator not in lowered:
                continue
            sentence = next((s for s in sentences if indicator in s.lower()), None)
            description = sentence or f"Encountered obstacle: {indicator}"
            if description not in obstacles:
                obstacles.append(description)
        return tuple(obstacles)

    def _extract_steps(self, text: str) -> tuple[str, ...]:
        steps = [
            fragment.strip()
            for fragment in _STEP_BREAK.split(text)
            if len(fragment.strip()) > self._rules.min_step_length
        ]
        steps = steps[: self._rules.max_steps]
        return tuple(steps) if steps else (self._rules.placeholder_step,)

    def _fallback(self, raw_payload: Any, exc: Exception) -> StructuredOutcome:
        return StructuredOutcome(
            status=OutcomeStatus.FAILED,
            message=self._rules.fallback_message,
            details=_best_effort_text(raw_payload),
            steps=(f"{self._rules.placeholder_step}, but its report could not be processed",),
            obstacles=(f"Error processing results: {exc}",),
        )


def _any_in(phrases: tuple[str, ...], lowered: str) -> bool:
    return any(phrase in lowered for phrase in phrases)


def _best_effort_text(raw_payload: Any) -> str:
    if isinstance(raw_payload, str):
        return raw_payload
    try:
        return json.dumps(raw_payload, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(raw_payload)
