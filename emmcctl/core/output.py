"""Structured output helper separating diagnostics from report content."""

import json
import sys
from typing import Any, TextIO

from emmcctl.core.style import ERROR, INFO, SUBTITLE, SUCCESS, WARNING, PlainStyle


class Output:
    """
    Helper for analyzer output.

    Diagnostics, progress and prompts go to stderr through the style.
    Report content goes to stdout so it can be scraped on its own.
    """

    def __init__(
        self,
        style: PlainStyle | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.style = style or PlainStyle()
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._summary: str | None = None
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def _diag(self, kind: str, message: str) -> None:
        print(self.style.apply(kind, message), file=self.stderr)
        self.stderr.flush()

    def info(self, message: str) -> None:
        """Print a progress message."""
        self._diag(INFO, message)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._diag(SUCCESS, message)

    def subtitle(self, message: str) -> None:
        """Print a section heading."""
        self._diag(SUBTITLE, message)

    def plain(self, message: str) -> None:
        """Print an unstyled diagnostic line."""
        print(message, file=self.stderr)
        self.stderr.flush()

    def newline(self) -> None:
        """Print an empty diagnostic line."""
        print(file=self.stderr)

    def error(self, message: str) -> None:
        """Record and print an error message."""
        self.errors.append(message)
        self._diag(ERROR, message)

    def warning(self, message: str) -> None:
        """Record and print a warning message."""
        self.warnings.append(message)
        self._diag(WARNING, message)

    def write(self, text: str) -> None:
        """Write report content to stdout."""
        self.stdout.write(text)
        if not text.endswith("\n"):
            self.stdout.write("\n")
        self.stdout.flush()

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def clear(self) -> None:
        """Drop stored data before the next analysis."""
        self.data = {}
        self._summary = None

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get summary or generate from data."""
        if self._summary:
            return self._summary
        if self.errors:
            return f"Error: {self.errors[-1]}"
        if self.warnings:
            return f"Warning: {self.warnings[-1]}"
        return "ok"

    def to_json(self) -> str:
        """Return data as JSON string."""
        return json.dumps(self.data, indent=2, default=str)
