"""Execution context for testability."""

import os
import shutil
import stat
import subprocess
import sys
from pathlib import Path
from typing import TextIO


class Context:
    """
    Wraps external calls for testability.

    In production: executes real commands, reads real files and the
    controlling terminal
    In tests: can be replaced with MockContext
    """

    def __init__(self) -> None:
        self._tty: TextIO | None = None

    def check_tool(self, name: str) -> bool:
        """Check if a tool exists in PATH."""
        return shutil.which(name) is not None

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = 60,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Timeout in seconds (None waits forever)
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode
        """
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            timeout=timeout,
            **kwargs,
        )

    def read_file(self, path: str) -> str:
        """Read file contents."""
        return Path(path).read_text()

    def file_exists(self, path: str) -> bool:
        """Check if file exists."""
        return Path(path).exists()

    def is_block_device(self, path: str) -> bool:
        """Check if path is a block-special file."""
        try:
            return stat.S_ISBLK(os.stat(path).st_mode)
        except OSError:
            return False

    def is_root(self) -> bool:
        """Check if running with an effective uid of 0."""
        return os.geteuid() == 0

    def is_interactive(self) -> bool:
        """Check if an input terminal is attached or reachable."""
        if sys.stdin is not None and sys.stdin.isatty():
            return True
        try:
            self._open_tty()
        except OSError:
            return False
        return True

    def read_line(self, prompt: str) -> str | None:
        """
        Prompt on stderr and read one line of terminal input.

        Reads from stdin when it is a terminal, otherwise from /dev/tty
        so the tool still works when piped into a shell.

        Returns:
            The line without its newline, or None at end of input
        """
        sys.stderr.write(prompt)
        sys.stderr.flush()

        if sys.stdin is not None and sys.stdin.isatty():
            source = sys.stdin
        else:
            source = self._open_tty()

        line = source.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def _open_tty(self) -> TextIO:
        if self._tty is None:
            self._tty = open("/dev/tty")
        return self._tty
