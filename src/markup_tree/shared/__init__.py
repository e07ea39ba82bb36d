"""Shared utilities for markup-tree.

This module provides configuration objects, diagnostic and recovery types,
and logging helpers used across the parsing, serialization and API layers.
"""

from .config import (
    DEFAULT_RAW_TEXT_ELEMENTS,
    DEFAULT_VOID_ELEMENTS,
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    ScanConfig,
    SerializeConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    Recovery,
    RecoveryKind,
)

__all__ = [
    "DEFAULT_RAW_TEXT_ELEMENTS",
    "DEFAULT_VOID_ELEMENTS",
    "ApiConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "ScanConfig",
    "SerializeConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "Recovery",
    "RecoveryKind",
]
