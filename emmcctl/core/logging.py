"""JSONL logging for analyzer sessions."""

import json
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, TextIO

TOOL_NAME = "emmcctl"


def get_log_path(base_path: Path | None = None) -> Path:
    """
    Get the log file path for today's sessions.

    Args:
        base_path: Base directory for logs (default: ~/var/log/emmcctl)

    Returns:
        Path to the log file: {base}/{date}/session.jsonl
    """
    if base_path is None:
        home = Path(os.environ.get("HOME", "/tmp"))
        base_path = home / "var" / "log" / TOOL_NAME

    today = date.today().isoformat()
    return base_path / today / "session.jsonl"


class SessionLogger:
    """
    JSONL logger for analyzer sessions.

    Writes structured log entries to a JSONL file. A logger whose file
    cannot be opened turns itself off.
    """

    def __init__(self, log_path: Path | None = None, enabled: bool = True):
        """
        Initialize logger.

        Args:
            log_path: Path to log file (default: auto-generated)
            enabled: Write nothing when False
        """
        self.log_path = log_path or get_log_path()
        self.enabled = enabled
        self.open_error: str | None = None
        self._file: TextIO | None = None

    def _ensure_file(self) -> bool:
        """Ensure log file is open."""
        if self._file is None:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a")
            except OSError as e:
                self.enabled = False
                self.open_error = f"Cannot open log file {self.log_path}: {e.strerror or e}"
                return False
        return True

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled or not self._ensure_file():
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "tool": TOOL_NAME,
            "message": message,
            **extra,
        }
        self._file.write(json.dumps(entry) + "\n")
        self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "SessionLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
