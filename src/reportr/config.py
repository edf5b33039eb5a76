"""reportr configuration management.

Handles:
- reportr.yaml config file, auto-discovered from the working directory
- REPORTR_* environment variables
- precedence: CLI overrides > env vars > config file > defaults

The pipeline itself never reads configuration; the CLI and plugin resolve
a Config and pass plain paths and providers into it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from reportr.assets import DEFAULT_TEMPLATE, AssetProvider, DirectoryAssetProvider, PackageAssetProvider
from reportr.errors import ErrorCode, make_error, with_cause
from reportr.validation import validate_config_dict

CONFIG_FILENAME = "reportr.yaml"
DEFAULT_OUTPUT_DIR = Path("target") / "cucumber"

# Environment variable -> Config field
ENV_VARS = {
    "REPORTR_OUTPUT_DIR": "output_dir",
    "REPORTR_TEMPLATE": "template",
    "REPORTR_TEMPLATE_DIR": "template_dir",
    "REPORTR_CHECK_SHAPE": "check_shape",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """reportr runtime configuration."""

    output_dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)
    template: str = DEFAULT_TEMPLATE
    template_dir: Path | None = None
    check_shape: bool = True
    config_file_path: Path | None = None

    def asset_provider(self) -> AssetProvider:
        """Template source for this configuration."""
        if self.template_dir is not None:
            return DirectoryAssetProvider(self.template_dir)
        return PackageAssetProvider()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "output_dir": str(self.output_dir),
            "template": self.template,
            "template_dir": str(self.template_dir) if self.template_dir else None,
            "check_shape": self.check_shape,
            "config_file_path": str(self.config_file_path) if self.config_file_path else None,
        }


def parse_bool(value: str | bool) -> bool:
    """Parse a boolean setting from env-style text."""
    if isinstance(value, bool):
        return value
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise make_error(ErrorCode.CONFIG_INVALID, f"not a boolean: {value!r}")


def find_config_file(start: Path | None = None) -> Path | None:
    """Find reportr.yaml by walking up directory tree.

    Stops at git root, home directory, or filesystem root.
    Returns None if not found.
    """
    current = (start or Path.cwd()).resolve()

    try:
        home = Path.home()
    except RuntimeError:
        home = None  # Can't determine home, just walk to root

    for _ in range(20):  # Max depth
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        if home and current == home:
            break
        if current == current.parent:
            break

        # Stop at git root (but check the config file first)
        if (current / ".git").exists():
            break

        current = current.parent

    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and schema-check a reportr.yaml file.

    Raises:
        ReportError: CONFIG_INVALID if the file cannot be read, is not YAML,
            or does not match the config schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise with_cause(ErrorCode.CONFIG_INVALID, path, e) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise with_cause(ErrorCode.CONFIG_INVALID, path, e) from e

    if data is None:
        return {}

    issues = validate_config_dict(data)
    if issues:
        err = make_error(ErrorCode.CONFIG_INVALID, str(path))
        err.details = "; ".join(str(i) for i in issues[:5])  # Show first 5
        raise err

    return data


def load_config(
    config_file: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration with precedence: overrides > env vars > config file.

    Args:
        config_file: Explicit reportr.yaml path (auto-discovered when omitted)
        overrides: CLI-provided values keyed by Config field; None values are ignored
        environ: Environment to read (default: os.environ)

    Returns:
        Loaded Config instance

    Raises:
        ReportError: CONFIG_INVALID for an unreadable or invalid config file,
            or a missing explicit config file.
    """
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    # Step 1: config file
    config_path: Path | None
    if config_file is not None:
        config_path = Path(config_file)
        if not config_path.is_file():
            raise make_error(ErrorCode.CONFIG_INVALID, f"config file not found: {config_path}")
    else:
        config_path = find_config_file()
    if config_path is not None:
        values.update(load_config_file(config_path))

    # Step 2: environment variables (override file)
    for env_name, key in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw:
            values[key] = raw

    # Step 3: explicit overrides
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    template_dir = values.get("template_dir")
    return Config(
        output_dir=Path(values.get("output_dir", DEFAULT_OUTPUT_DIR)),
        template=str(values.get("template", DEFAULT_TEMPLATE)),
        template_dir=Path(template_dir) if template_dir else None,
        check_shape=parse_bool(values.get("check_shape", True)),
        config_file_path=config_path,
    )
