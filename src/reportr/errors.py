"""reportr Error Code Registry.

Provides structured error codes with helpful messages and next steps.
Each error has:
- Code: REPORTR-EXXX format
- Message: Human-readable description
- Next step: Actionable command or instruction
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """reportr error codes."""

    # Input record errors (E100-E199)
    INPUT_MISSING = "E100"  # Record path absent, not a file, or empty
    INPUT_INVALID = "E101"  # Record is not UTF-8 or not standard JSON

    # Template errors (E200-E299)
    TEMPLATE_MISSING = "E200"  # Template asset not found
    TEMPLATE_MALFORMED = "E201"  # Placeholder absent from template

    # Output errors (E300-E399)
    OUTPUT_UNWRITABLE = "E300"  # Directory creation or file write failed

    # Configuration errors (E400-E499)
    CONFIG_INVALID = "E400"  # Config file unreadable or fails schema


class ReportError(Exception):
    """Structured reportr error with code, message, and next step."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        next_step: str,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.next_step = next_step
        self.details = details

    def __str__(self) -> str:
        lines = [
            f"REPORTR-{self.code.value}: {self.message}",
        ]
        if self.details:
            lines.append(f"  Details: {self.details}")
        lines.append(f"  Next step: {self.next_step}")
        return "\n".join(lines)


# Pre-defined error templates
ERROR_TEMPLATES: dict[ErrorCode, tuple[str, str]] = {
    # (message_template, next_step)
    ErrorCode.INPUT_MISSING: (
        "JSON report file not found or is empty: {details}",
        "Check that the test run wrote its Cucumber JSON output to this path",
    ),
    ErrorCode.INPUT_INVALID: (
        "JSON report file is not valid JSON: {details}",
        "Run 'reportr validate <record>' to see the parse error",
    ),
    ErrorCode.TEMPLATE_MISSING: (
        "Could not find report template: {details}",
        "Check --template / --template-dir, or reinstall reportr to restore bundled assets",
    ),
    ErrorCode.TEMPLATE_MALFORMED: (
        "Could not find placeholder '/* CUCUMBER_REPORT_DATA_PLACEHOLDER */' in template: {details}",
        "Rebuild the template so it contains the data placeholder exactly once",
    ),
    ErrorCode.OUTPUT_UNWRITABLE: (
        "Could not write report output: {details}",
        "Check permissions or use a different --out path",
    ),
    ErrorCode.CONFIG_INVALID: (
        "Configuration is invalid: {details}",
        "Run 'reportr show-config' to inspect the resolved configuration",
    ),
}


def make_error(code: ErrorCode, details: Optional[str] = None) -> ReportError:
    """Create a ReportError from a code with optional details.

    Args:
        code: The error code
        details: Optional details to include in the message

    Returns:
        ReportError instance ready to raise or log
    """
    message_template, next_step = ERROR_TEMPLATES[code]

    # Format message with details if present
    if details and "{details}" in message_template:
        message = message_template.format(details=details)
    elif details:
        message = f"{message_template}: {details}"
    else:
        message = message_template.replace(": {details}", "")

    return ReportError(
        code=code,
        message=message,
        next_step=next_step,
        details=details if "{details}" not in message_template else None,
    )


def with_cause(code: ErrorCode, subject: object, exc: BaseException) -> ReportError:
    """Build a ReportError whose details name the subject and the underlying cause."""
    err = make_error(code, str(subject))
    err.details = f"{type(exc).__name__}: {exc}"
    return err
