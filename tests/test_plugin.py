"""Tests for the harness hand-off plugin."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from reportr.assets import StaticAssetProvider
from reportr.config import DEFAULT_OUTPUT_DIR, Config
from reportr.plugin import ReportPlugin, create_temp_record_file
from reportr.pipeline.writer import REPORT_FILENAME

pytestmark = pytest.mark.usefixtures("isolated_cwd")


class TestCreateTempRecordFile:
    """Tests for create_temp_record_file()."""

    def test_creates_empty_json_file(self) -> None:
        path = create_temp_record_file()
        try:
            assert path.exists()
            assert path.name.startswith("cucumber")
            assert path.suffix == ".json"
            assert path.stat().st_size == 0
        finally:
            path.unlink()


class TestReportPlugin:
    """Tests for ReportPlugin."""

    def test_defaults(self) -> None:
        plugin = ReportPlugin()
        try:
            assert plugin.output_dir == DEFAULT_OUTPUT_DIR
            assert plugin.record_path.exists()
        finally:
            plugin.record_path.unlink()

    def test_run_finished_generates_report(
        self, record_path: Path, output_dir: Path, template_assets: StaticAssetProvider
    ) -> None:
        plugin = ReportPlugin(output_dir, record_path, assets=template_assets)

        result = plugin.on_run_finished(object())

        assert result == (output_dir / REPORT_FILENAME).resolve()
        assert '"Sample Feature"' in result.read_text(encoding="utf-8")

    def test_harness_writes_into_temp_record(
        self, output_dir: Path, template_assets: StaticAssetProvider, sample_record: str
    ) -> None:
        plugin = ReportPlugin(output_dir, assets=template_assets)
        try:
            plugin.record_path.write_text(sample_record, encoding="utf-8")
            assert plugin.on_run_finished() is not None
        finally:
            plugin.record_path.unlink()

    def test_run_without_results_is_logged_not_raised(
        self,
        output_dir: Path,
        test_logger: logging.Logger,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        plugin = ReportPlugin(output_dir, logger=test_logger)
        try:
            with caplog.at_level(logging.ERROR, logger=test_logger.name):
                assert plugin.on_run_finished() is None
        finally:
            plugin.record_path.unlink()

        assert "JSON report file not found or is empty" in caplog.text
        assert not output_dir.exists()


class TestReportPluginConfig:
    """ReportPlugin picks up reportr.yaml and REPORTR_* settings."""

    def test_env_output_dir(
        self,
        record_path: Path,
        tmp_path: Path,
        template_assets: StaticAssetProvider,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        target = tmp_path / "from-env"
        monkeypatch.setenv("REPORTR_OUTPUT_DIR", str(target))

        plugin = ReportPlugin(record_path=record_path, assets=template_assets)

        assert plugin.output_dir == target
        assert plugin.on_run_finished() == (target / REPORT_FILENAME).resolve()

    def test_config_file_disables_shape_check(
        self,
        tmp_path: Path,
        output_dir: Path,
        isolated_cwd: Path,
        template_assets: StaticAssetProvider,
        test_logger: logging.Logger,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        (isolated_cwd / "reportr.yaml").write_text("check_shape: false\n", encoding="utf-8")
        record = tmp_path / "object.json"
        record.write_text('{"not": "an array"}', encoding="utf-8")

        plugin = ReportPlugin(output_dir, record, logger=test_logger, assets=template_assets)
        with caplog.at_level(logging.WARNING, logger=test_logger.name):
            assert plugin.on_run_finished() is not None

        assert plugin.check_shape is False
        assert "Cucumber JSON shape" not in caplog.text

    def test_explicit_arguments_win(self, record_path: Path, output_dir: Path) -> None:
        config = Config(output_dir=Path("ignored"), template="other.html", check_shape=False)

        plugin = ReportPlugin(output_dir, record_path, template="index.html", check_shape=True, config=config)

        assert plugin.output_dir == output_dir
        assert plugin.template == "index.html"
        assert plugin.check_shape is True

    def test_invalid_config_file_falls_back_to_defaults(
        self,
        record_path: Path,
        isolated_cwd: Path,
        test_logger: logging.Logger,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        (isolated_cwd / "reportr.yaml").write_text("unknown_key: 1\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger=test_logger.name):
            plugin = ReportPlugin(record_path=record_path, logger=test_logger)

        assert plugin.output_dir == DEFAULT_OUTPUT_DIR
        assert plugin.check_shape is True
        assert "REPORTR-E400" in caplog.text
