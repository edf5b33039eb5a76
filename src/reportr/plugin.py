"""Hand-off point between a test harness and the report pipeline.

The harness writes its Cucumber JSON to :attr:`ReportPlugin.record_path`
while tests run, then calls :meth:`ReportPlugin.on_run_finished` once. When
no record path is supplied a temporary file is created for it and removed
when the interpreter exits.

Settings not passed to the constructor come from the resolved reportr
configuration (``reportr.yaml`` and ``REPORTR_*`` variables), the same way
the CLI resolves them.
"""
from __future__ import annotations

import atexit
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from reportr.assets import AssetProvider
from reportr.config import Config, load_config
from reportr.errors import ReportError
from reportr.pipeline.generate import DEFAULT_LOGGER_NAME, generate_report


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def create_temp_record_file() -> Path:
    """Create an empty cucumber*.json temp file deleted at interpreter exit."""
    fd, name = tempfile.mkstemp(prefix="cucumber", suffix=".json")
    os.close(fd)
    path = Path(name)
    atexit.register(_remove_quietly, path)
    return path


class ReportPlugin:
    """Generate the pretty report when a test run finishes.

    Explicit arguments win over ``config``. When ``config`` is omitted it is
    loaded with :func:`reportr.config.load_config`; an invalid config file is
    logged and the defaults are used, so the harness is never interrupted.
    """

    def __init__(
        self,
        output_dir: str | Path | None = None,
        record_path: str | Path | None = None,
        *,
        logger: Optional[logging.Logger] = None,
        assets: Optional[AssetProvider] = None,
        template: Optional[str] = None,
        check_shape: Optional[bool] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.config = config if config is not None else self._resolve_config()

        self.output_dir = Path(output_dir) if output_dir is not None else self.config.output_dir
        self.record_path = Path(record_path) if record_path is not None else create_temp_record_file()
        self.assets = assets if assets is not None else self.config.asset_provider()
        self.template = template if template is not None else self.config.template
        self.check_shape = check_shape if check_shape is not None else self.config.check_shape

    def _resolve_config(self) -> Config:
        try:
            return load_config()
        except ReportError as e:
            self.logger.warning("Ignoring reportr configuration, using defaults\n%s", e)
            return Config()

    def on_run_finished(self, *_event: Any) -> Optional[Path]:
        """Event handler for the end of a test run; accepts and ignores the event."""
        return generate_report(
            self.record_path,
            self.output_dir,
            logger=self.logger,
            assets=self.assets,
            template=self.template,
            check_shape=self.check_shape,
        )

    def __repr__(self) -> str:
        return f"ReportPlugin(output_dir={str(self.output_dir)!r}, record_path={str(self.record_path)!r})"
