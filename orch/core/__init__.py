"""Core types: results, errors and configuration."""

from .config import Config, ConfigError, load_config
from .errors import (
    AggregateFailure,
    ErrorCode,
    NotFoundError,
    OrchestratorError,
    UnitFailure,
    ValidationError,
)
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    # errors
    "AggregateFailure",
    "ErrorCode",
    "NotFoundError",
    "OrchestratorError",
    "UnitFailure",
    "ValidationError",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
