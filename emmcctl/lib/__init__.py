"""Shared utility library for the analyzer."""

from emmcctl.lib.filesystem import FileError, file_exists, is_block_device, read_file
from emmcctl.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "FileError",
    "check_tool",
    "file_exists",
    "is_block_device",
    "read_file",
    "run_command",
]
