"""Parse the record and re-serialize it in canonical compact form.

Re-serializing validates the document and strips whatever formatting the
producer used, so the text spliced into the template is always a single
well-formed JSON value. Normalization is idempotent.

Number and key handling:
- integers are kept exactly (up to the interpreter's int digit limit)
- floats are written with their shortest repr (``1.50`` -> ``1.5``)
- ``NaN`` / ``Infinity`` and floats overflowing to infinity are rejected
- duplicate object keys keep the last value, at the first key's position
"""
from __future__ import annotations

import json
from typing import Any, NoReturn

from reportr.errors import ErrorCode, make_error, with_cause

# Compact form: no whitespace between tokens
CANONICAL_SEPARATORS = (",", ":")

# Inside a <script> block the HTML parser still reacts to "</", "<!--" and
# "<script". The \uXXXX forms are equivalent JSON spellings, and canonical
# JSON only carries these characters inside strings.
_HTML_ESCAPE_TABLE = str.maketrans({
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
})


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"non-standard JSON constant {name!r}")


def parse_record(text: str) -> Any:
    """Parse record text as a generic JSON document.

    Raises:
        ReportError: INPUT_INVALID if the text is not standard JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise with_cause(ErrorCode.INPUT_INVALID, f"line {e.lineno} column {e.colno}", e) from e
    except (ValueError, RecursionError) as e:
        # int digit limit, rejected constants, pathological nesting
        raise with_cause(ErrorCode.INPUT_INVALID, "unsupported value", e) from e


def canonicalize(document: Any) -> str:
    """Serialize a parsed document to canonical compact JSON text.

    Raises:
        ReportError: INPUT_INVALID if the document holds values that standard
            JSON in UTF-8 cannot carry.
    """
    try:
        text = json.dumps(
            document,
            ensure_ascii=False,
            allow_nan=False,
            separators=CANONICAL_SEPARATORS,
        )
    except (ValueError, RecursionError) as e:
        raise with_cause(ErrorCode.INPUT_INVALID, "value cannot be serialized", e) from e

    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise with_cause(ErrorCode.INPUT_INVALID, "unpaired surrogate in string", e) from e

    return text.translate(_HTML_ESCAPE_TABLE)


def normalize_record(text: str) -> str:
    """Parse and canonicalize record text in one step."""
    return canonicalize(parse_record(text))
