"""Drive a record through the pipeline and write the report.

:func:`generate_report` is the single trigger an upstream harness calls once
its record file is complete. Nothing raised inside the pipeline reaches the
caller: every failure is logged through the injected logger and the run ends
without an output file.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import jsonschema

from reportr.assets import DEFAULT_TEMPLATE, AssetProvider, PackageAssetProvider
from reportr.errors import ErrorCode, ReportError, with_cause
from reportr.pipeline import PipelineState, ReportOutcome
from reportr.pipeline.embedder import embed_record, load_template
from reportr.pipeline.loader import load_record
from reportr.pipeline.normalizer import canonicalize, parse_record
from reportr.pipeline.writer import write_report
from reportr.summary import RecordSummary
from reportr.validation import check_record_shape

DEFAULT_LOGGER_NAME = "reportr"

# Error code for failures a stage did not classify itself
_STAGE_ERROR_CODES = {
    PipelineState.START: ErrorCode.INPUT_MISSING,
    PipelineState.LOADED: ErrorCode.INPUT_INVALID,
    PipelineState.NORMALIZED: ErrorCode.TEMPLATE_MISSING,
    PipelineState.EMBEDDED: ErrorCode.OUTPUT_UNWRITABLE,
}

# Shape findings logged per run; the rest are counted
_MAX_SHAPE_WARNINGS = 5


def _log_shape_issues(document: object, logger: logging.Logger) -> None:
    try:
        issues = check_record_shape(document)
    except (OSError, ValueError, jsonschema.exceptions.SchemaError) as e:
        # Advisory check; a broken bundled schema must not block the report
        logger.warning("Skipping record shape check: %s", e)
        return
    if not issues:
        return
    logger.warning(
        "Record does not match the Cucumber JSON shape (%d finding(s)); embedding it anyway",
        len(issues),
    )
    for issue in issues[:_MAX_SHAPE_WARNINGS]:
        logger.warning("  %s", issue)
    if len(issues) > _MAX_SHAPE_WARNINGS:
        logger.warning("  ... and %d more", len(issues) - _MAX_SHAPE_WARNINGS)


def run_pipeline(
    record_path: str | Path,
    output_dir: str | Path,
    *,
    logger: Optional[logging.Logger] = None,
    assets: Optional[AssetProvider] = None,
    template: str = DEFAULT_TEMPLATE,
    check_shape: bool = True,
) -> ReportOutcome:
    """Run all four stages and return the outcome. Never raises.

    Args:
        record_path: Cucumber JSON file written by the test harness.
        output_dir: Directory for cucumber-pretty-report.html; created if missing.
        logger: Receives all diagnostics (default: the "reportr" logger).
        assets: Template source (default: templates bundled with reportr).
        template: Template identifier within ``assets``.
        check_shape: Log warnings when the record does not look like Cucumber JSON.

    Returns:
        ReportOutcome in state DONE or ABORTED.
    """
    log = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
    assets = assets or PackageAssetProvider()
    record_path = Path(record_path)
    outcome = ReportOutcome(state=PipelineState.START, record_path=record_path)

    try:
        text = load_record(record_path)
        outcome.state = PipelineState.LOADED
        log.debug("Loaded record %s (%d chars)", record_path, len(text))

        document = parse_record(text)
        if check_shape:
            _log_shape_issues(document, log)
        record_text = canonicalize(document)
        outcome.summary = RecordSummary.from_document(document)
        outcome.state = PipelineState.NORMALIZED
        log.debug("Normalized record to %d chars", len(record_text))

        template_text = load_template(assets, template)
        merged = embed_record(record_text, template_text, source=f"{template} ({assets!r})")
        outcome.state = PipelineState.EMBEDDED
        log.debug("Embedded record into template %s", template)

        outcome.output_path = write_report(merged, output_dir)
        outcome.state = PipelineState.WRITTEN
    except ReportError as e:
        return _abort(outcome, e, log)
    except Exception as e:
        log.exception("Unexpected failure while generating cucumber pretty report")
        code = _STAGE_ERROR_CODES.get(outcome.state, ErrorCode.OUTPUT_UNWRITABLE)
        return _abort(outcome, with_cause(code, record_path.absolute(), e), log)

    outcome.state = PipelineState.DONE
    log.info("Cucumber pretty report generated at: %s", outcome.output_path)
    log.info("Report covers %s", outcome.summary.describe())
    return outcome


def _abort(outcome: ReportOutcome, error: ReportError, log: logging.Logger) -> ReportOutcome:
    outcome.aborted_at = outcome.state
    outcome.state = PipelineState.ABORTED
    outcome.error = error
    outcome.output_path = None
    log.error("Failed to generate cucumber pretty report\n%s", error)
    return outcome


def generate_report(
    record_path: str | Path,
    output_dir: str | Path,
    *,
    logger: Optional[logging.Logger] = None,
    assets: Optional[AssetProvider] = None,
    template: str = DEFAULT_TEMPLATE,
    check_shape: bool = True,
) -> Optional[Path]:
    """Generate the HTML report for a finished test run.

    Returns:
        Absolute path of the written report, or None if the run was aborted
        (the reason has been logged).
    """
    outcome = run_pipeline(
        record_path,
        output_dir,
        logger=logger,
        assets=assets,
        template=template,
        check_shape=check_shape,
    )
    return outcome.output_path
