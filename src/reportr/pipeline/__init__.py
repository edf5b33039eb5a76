"""Report materialization pipeline.

Stages run strictly in order: load, normalize, embed, write. Each stage
either hands its result to the next or raises a coded ReportError; the
driver in :mod:`reportr.pipeline.generate` turns that into an aborted
outcome and a log line.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from reportr.errors import ReportError
from reportr.summary import RecordSummary


class PipelineState(Enum):
    """Position of a run in the pipeline."""

    START = "start"
    LOADED = "loaded"
    NORMALIZED = "normalized"
    EMBEDDED = "embedded"
    WRITTEN = "written"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def terminal(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.ABORTED)


@dataclass
class ReportOutcome:
    """Result of one pipeline run.

    Attributes:
        state: Final state, DONE or ABORTED.
        record_path: Record the run read.
        output_path: Absolute path of the written report (DONE only).
        error: Why the run stopped (ABORTED only).
        aborted_at: Last state reached before the abort.
        summary: Record counts, available once the record was normalized.
    """

    state: PipelineState
    record_path: Path
    output_path: Optional[Path] = None
    error: Optional[ReportError] = None
    aborted_at: Optional[PipelineState] = None
    summary: Optional[RecordSummary] = None

    @property
    def ok(self) -> bool:
        """Check if the report was written."""
        return self.state == PipelineState.DONE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "state": self.state.value,
            "record_path": str(self.record_path),
            "output_path": str(self.output_path) if self.output_path else None,
            "error": {
                "code": self.error.code.value,
                "message": self.error.message,
                "details": self.error.details,
            } if self.error else None,
            "aborted_at": self.aborted_at.value if self.aborted_at else None,
            "summary": self.summary.to_dict() if self.summary else None,
        }
