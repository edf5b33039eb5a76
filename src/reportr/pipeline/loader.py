"""Locate and read the Cucumber JSON record written by the test harness."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from reportr.errors import ErrorCode, make_error, with_cause


@dataclass(frozen=True)
class RecordHandle:
    """Reference to the record file produced upstream.

    The file may be transient (deleted when the harness process exits), so
    existence and size are read from disk on every access.
    """

    path: Path

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def size(self) -> int:
        """Byte length of the record, 0 when it does not exist."""
        try:
            return self.path.stat().st_size
        except OSError:
            return 0

    @property
    def usable(self) -> bool:
        return self.path.is_file() and self.size > 0


def load_record(path: str | Path) -> str:
    """Return the full text of the record at ``path``.

    Raises:
        ReportError: INPUT_MISSING if the path is absent, not a regular file,
            empty, or cannot be read; INPUT_INVALID if it is not UTF-8.
    """
    handle = RecordHandle(Path(path))
    if not handle.usable:
        raise make_error(ErrorCode.INPUT_MISSING, str(handle.path.absolute()))

    try:
        # utf-8-sig drops a leading byte-order mark if the producer wrote one
        return handle.path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise with_cause(ErrorCode.INPUT_INVALID, handle.path.absolute(), e) from e
    except OSError as e:
        raise with_cause(ErrorCode.INPUT_MISSING, handle.path.absolute(), e) from e
