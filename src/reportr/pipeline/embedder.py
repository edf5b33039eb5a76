"""Splice canonical record text into the report template."""
from __future__ import annotations

from reportr.assets import AssetProvider
from reportr.errors import ErrorCode, make_error, with_cause

# The one contractual embedding point in every template
PLACEHOLDER = "/* CUCUMBER_REPORT_DATA_PLACEHOLDER */"


def load_template(assets: AssetProvider, identifier: str) -> str:
    """Load a template through the asset provider.

    Raises:
        ReportError: TEMPLATE_MISSING if the provider has no such asset or
            cannot read it.
    """
    try:
        text = assets.load(identifier)
    except (OSError, UnicodeDecodeError) as e:
        raise with_cause(ErrorCode.TEMPLATE_MISSING, f"{identifier} ({assets!r})", e) from e

    if text is None:
        raise make_error(ErrorCode.TEMPLATE_MISSING, f"{identifier} ({assets!r})")
    return text


def embed_record(record_text: str, template_text: str, *, source: str = "template") -> str:
    """Return ``template_text`` with the first placeholder replaced by ``record_text``.

    Replacement is literal and happens once; the rest of the template is
    left untouched.

    Raises:
        ReportError: TEMPLATE_MALFORMED if the placeholder is absent.
    """
    index = template_text.find(PLACEHOLDER)
    if index < 0:
        raise make_error(ErrorCode.TEMPLATE_MALFORMED, source)

    return template_text[:index] + record_text + template_text[index + len(PLACEHOLDER):]
