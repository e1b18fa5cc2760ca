"""Process utilities for the analyzer."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emmcctl.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    check: bool = False,
    timeout: int | None = 60,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        check: Raise on non-zero exit
        timeout: Timeout in seconds (None waits forever)

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started, or if check=True
            and it exits non-zero
    """
    if context is None:
        from emmcctl.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=False, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(f"Command failed: {' '.join(cmd)}") from e

    if check and result.returncode != 0:
        raise CommandError(
            f"Command failed with exit code {result.returncode}: {' '.join(cmd)}",
            returncode=result.returncode,
            stderr=(result.stderr or "").strip(),
        )

    return result.stdout


def check_tool(name: str, context: "Context | None" = None) -> bool:
    """Check if a tool exists in PATH."""
    if context is None:
        from emmcctl.core.context import Context
        context = Context()

    return context.check_tool(name)
