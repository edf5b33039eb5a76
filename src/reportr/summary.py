"""Headline counts for a Cucumber JSON record.

The record is not schema-checked here: anything that does not look like a
feature / scenario / step simply contributes nothing to the counts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Scenario-level element types that are not scenarios themselves
_NON_SCENARIO_TYPES = {"background"}


@dataclass
class RecordSummary:
    """Aggregate counts over a record.

    Attributes:
        features: Number of feature objects.
        scenarios: Number of scenario elements (backgrounds excluded).
        steps_by_status: Step count keyed by result status.
        duration_ns: Sum of step durations, in nanoseconds.
    """

    features: int = 0
    scenarios: int = 0
    steps_by_status: dict[str, int] = field(default_factory=dict)
    duration_ns: int = 0

    @property
    def total_steps(self) -> int:
        """Total number of steps."""
        return sum(self.steps_by_status.values())

    @property
    def passed_steps(self) -> int:
        return self.steps_by_status.get("passed", 0)

    @property
    def failed_steps(self) -> int:
        return self.steps_by_status.get("failed", 0)

    @property
    def all_passed(self) -> bool:
        """Check if every step passed."""
        return self.total_steps > 0 and self.passed_steps == self.total_steps

    @classmethod
    def from_document(cls, document: Any) -> RecordSummary:
        """Build a summary from a parsed record."""
        summary = cls()
        if not isinstance(document, list):
            return summary

        for feature in document:
            if not isinstance(feature, dict):
                continue
            summary.features += 1
            for element in _as_list(feature.get("elements")):
                if not isinstance(element, dict):
                    continue
                if element.get("type") not in _NON_SCENARIO_TYPES:
                    summary.scenarios += 1
                for step in _as_list(element.get("steps")):
                    summary._add_step(step)
        return summary

    def _add_step(self, step: Any) -> None:
        if not isinstance(step, dict):
            return
        result = step.get("result")
        if not isinstance(result, dict):
            result = {}

        status = result.get("status")
        if not isinstance(status, str) or not status:
            status = "unknown"
        self.steps_by_status[status] = self.steps_by_status.get(status, 0) + 1

        duration = result.get("duration")
        # bool is an int subclass; a flag is not a duration
        if isinstance(duration, int) and not isinstance(duration, bool) and duration > 0:
            self.duration_ns += duration

    def describe(self) -> str:
        """One-line human-readable summary."""
        statuses = ", ".join(
            f"{count} {status}" for status, count in sorted(self.steps_by_status.items())
        )
        return (
            f"{self.features} feature(s), {self.scenarios} scenario(s), "
            f"{self.total_steps} step(s)"
            + (f" [{statuses}]" if statuses else "")
            + f" in {_format_duration(self.duration_ns)}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "features": self.features,
            "scenarios": self.scenarios,
            "steps": self.total_steps,
            "steps_by_status": dict(sorted(self.steps_by_status.items())),
            "duration_ns": self.duration_ns,
        }


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _format_duration(ns: int) -> str:
    """Format a nanosecond duration in human-readable form."""
    ms = ns / 1_000_000
    if ms < 1000:
        return f"{ms:.0f}ms"
    elif ms < 60000:
        return f"{ms/1000:.1f}s"
    else:
        mins = int(ms / 60000)
        secs = (ms % 60000) / 1000
        return f"{mins}m {secs:.0f}s"
