"""reportr: self-contained HTML reports from Cucumber JSON test records."""
from __future__ import annotations

__version__ = "0.1.0"

from reportr.pipeline.generate import generate_report, run_pipeline  # noqa: E402

__all__ = [
    "__version__",
    "generate_report",
    "run_pipeline",
]
