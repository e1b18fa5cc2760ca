"""Filesystem utilities for the analyzer."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emmcctl.core.context import Context


class FileError(Exception):
    """Error accessing a file."""

    pass


def _resolve(context: "Context | None") -> "Context":
    if context is None:
        from emmcctl.core.context import Context
        return Context()
    return context


def read_file(path: str, context: "Context | None" = None) -> str:
    """
    Read a sysfs or procfs file.

    Raises:
        FileError: If the file can't be read
    """
    try:
        return _resolve(context).read_file(path)
    except FileNotFoundError:
        raise FileError(f"File not found: {path}")
    except OSError as e:
        raise FileError(f"Cannot read {path}: {e.strerror or e}")


def file_exists(path: str, context: "Context | None" = None) -> bool:
    """Check if a path exists (device nodes included)."""
    return _resolve(context).file_exists(path)


def is_block_device(path: str, context: "Context | None" = None) -> bool:
    """True if path exists and is a block-special file."""
    return _resolve(context).is_block_device(path)
