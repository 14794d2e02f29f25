"""Core domain types and logic."""

from .config import ConfigError, PackConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .project import Project
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "PackConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # project
    "Project",
    # result
    "Err",
    "Ok",
    "Result",
]
