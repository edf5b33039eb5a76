"""reportr test configuration and fixtures."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_DIR))

from reportr.assets import StaticAssetProvider  # noqa: E402
from reportr.config import ENV_VARS  # noqa: E402
from reportr.pipeline.embedder import PLACEHOLDER  # noqa: E402

SAMPLE_RECORD = (
    '[{"name":"Sample Feature","elements":[{"name":"Sample Scenario","steps":'
    '[{"keyword":"Given ","name":"I have a sample step","result":'
    '{"status":"passed","duration":1500000}}]}]}]'
)

SIMPLE_TEMPLATE = f"""<!DOCTYPE html>
<html>
<head>
    <title>Cucumber Report</title>
</head>
<body>
    <div id="root"></div>
    <script>
        window.CUCUMBER_REPORT_DATA = {PLACEHOLDER};
    </script>
</body>
</html>
"""


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def sample_run_path(fixtures_dir: Path) -> Path:
    """Return the path to records/sample_run.json."""
    return fixtures_dir / "records" / "sample_run.json"


@pytest.fixture
def sample_record() -> str:
    """Minimal one-feature record, already in canonical form."""
    return SAMPLE_RECORD


@pytest.fixture
def simple_template() -> str:
    """Minimal template with the placeholder inside a <script> assignment."""
    return SIMPLE_TEMPLATE


@pytest.fixture
def record_path(tmp_path: Path) -> Path:
    """Write the minimal sample feature record and return its path."""
    path = tmp_path / "cucumber.json"
    path.write_text(SAMPLE_RECORD, encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return a not-yet-existing output directory."""
    return tmp_path / "output"


@pytest.fixture
def template_assets() -> StaticAssetProvider:
    """Asset provider serving a minimal template under index.html."""
    return StaticAssetProvider({"index.html": SIMPLE_TEMPLATE})


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger injected into the pipeline; captured through caplog."""
    logger = logging.getLogger("test_reportr")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty git-rooted directory with no REPORTR_* variables set.

    Keeps a developer's reportr.yaml or environment out of the tests.
    """
    work = tmp_path / "work"
    (work / ".git").mkdir(parents=True)
    monkeypatch.chdir(work)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return work
