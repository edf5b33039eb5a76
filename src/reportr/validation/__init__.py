"""Schema checks for Cucumber records and reportr config files."""
from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Any

import jsonschema

RECORD_SCHEMA = "cucumber-record.schema.json"
CONFIG_SCHEMA = "reportr.config.schema.json"


@dataclass(frozen=True)
class ShapeIssue:
    """A single schema finding."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} - {self.message}"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by name."""
    resource = resources.files("reportr").joinpath("schemas", schema_name)
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not found: {schema_name}")
    return json.loads(resource.read_text(encoding="utf-8"))


def _format_path(path: list[Any]) -> str:
    """Format a jsonschema path as a dotted string."""
    if not path:
        return "$"
    parts = ["$"]
    for p in path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(f".{p}")
    return "".join(parts)


def _iter_issues(schema_name: str, data: Any) -> list[ShapeIssue]:
    validator = jsonschema.Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
    return [
        ShapeIssue(path=_format_path(list(err.absolute_path)), message=err.message)
        for err in errors
    ]


def check_record_shape(document: Any) -> list[ShapeIssue]:
    """Check a parsed record against the Cucumber JSON shape.

    Advisory only: the pipeline embeds records whatever their shape, and
    reports these findings as warnings.

    Args:
        document: Parsed record.

    Returns:
        Findings, empty when the record looks like Cucumber JSON.
    """
    return _iter_issues(RECORD_SCHEMA, document)


def validate_config_dict(data: Any) -> list[ShapeIssue]:
    """Validate a loaded config file mapping against the config schema."""
    return _iter_issues(CONFIG_SCHEMA, data)
