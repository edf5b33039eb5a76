"""Persist the merged report document."""
from __future__ import annotations

import os
import uuid
from pathlib import Path

from reportr.errors import ErrorCode, with_cause

REPORT_FILENAME = "cucumber-pretty-report.html"


def ensure_output_dir(output_dir: str | Path) -> Path:
    """Create ``output_dir`` and all missing ancestors.

    Raises:
        ReportError: OUTPUT_UNWRITABLE if the directory cannot be created,
            including when a regular file occupies the path.
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise with_cause(ErrorCode.OUTPUT_UNWRITABLE, output_dir.absolute(), e) from e
    return output_dir


def write_report(document: str, output_dir: str | Path) -> Path:
    """Write ``document`` to ``<output_dir>/cucumber-pretty-report.html``.

    The text goes to a sibling temp file first and is then moved over the
    target, so a failed write never leaves a truncated report behind. Any
    previous report is replaced.

    Returns:
        Absolute path of the written report.

    Raises:
        ReportError: OUTPUT_UNWRITABLE if the directory or file cannot be written.
    """
    output_dir = ensure_output_dir(output_dir)
    report_path = output_dir / REPORT_FILENAME
    # Unique per writer so concurrent runs never share a temp file
    tmp_path = output_dir / f".{REPORT_FILENAME}.{uuid.uuid4().hex}.tmp"

    try:
        tmp_path.write_text(document, encoding="utf-8", newline="")
        os.replace(tmp_path, report_path)
    except (OSError, UnicodeEncodeError) as e:
        raise with_cause(ErrorCode.OUTPUT_UNWRITABLE, report_path.absolute(), e) from e
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass

    return report_path.resolve()
