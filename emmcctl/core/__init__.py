"""Core analyzer functionality."""

from emmcctl.core.config import Config, ConfigError, load_config
from emmcctl.core.context import Context
from emmcctl.core.logging import SessionLogger, get_log_path
from emmcctl.core.output import Output
from emmcctl.core.style import AnsiStyle, PlainStyle, make_style

__all__ = [
    "AnsiStyle",
    "Config",
    "ConfigError",
    "Context",
    "Output",
    "PlainStyle",
    "SessionLogger",
    "get_log_path",
    "load_config",
    "make_style",
]
