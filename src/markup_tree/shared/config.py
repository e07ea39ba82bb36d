"""Configuration classes for markup-tree.

Component configurations validate themselves in ``__post_init__`` and are
aggregated into an immutable ``ParserConfig`` that the API layer and the CLI
pass around.
"""

import json
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

# Elements that never have children or a closing tag.
DEFAULT_VOID_ELEMENTS: FrozenSet[str] = frozenset(
    {"br", "img", "input", "link", "meta", "hr", "source", "area"}
)

# Elements whose inner span is kept verbatim instead of being parsed.
DEFAULT_RAW_TEXT_ELEMENTS: FrozenSet[str] = frozenset({"script"})

EXTENDED_RAW_TEXT_ELEMENTS: FrozenSet[str] = frozenset(
    {"script", "style", "textarea", "title"}
)

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_COMPONENTS = ["scan", "serialize", "api", "global_"]


def max_supported_depth() -> int:
    """Deepest ``ScanConfig.max_depth`` the current recursion limit allows.

    Each nesting level costs the scanner two stack frames; the remaining
    half of the limit is left for callers.
    """
    return sys.getrecursionlimit() // 4


def _normalize_tag_set(names: Iterable[str]) -> FrozenSet[str]:
    if isinstance(names, str):
        raise ValueError("Tag name sets must be collections, not a single string")
    normalized = frozenset(name.strip().lower() for name in names)
    if "" in normalized:
        raise ValueError("Tag name sets cannot contain empty names")
    return normalized


@dataclass
class ScanConfig:
    """Configuration for the markup scanner."""

    void_elements: FrozenSet[str] = DEFAULT_VOID_ELEMENTS
    raw_text_elements: FrozenSet[str] = DEFAULT_RAW_TEXT_ELEMENTS
    max_depth: int = 200
    collect_diagnostics: bool = True

    def __post_init__(self) -> None:
        """Validate scanner configuration."""
        self.void_elements = _normalize_tag_set(self.void_elements)
        self.raw_text_elements = _normalize_tag_set(self.raw_text_elements)
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.max_depth > max_supported_depth():
            raise ValueError(
                f"max_depth must be <= {max_supported_depth()} "
                f"for the current recursion limit of {sys.getrecursionlimit()}"
            )


@dataclass
class SerializeConfig:
    """Configuration for the serializer."""

    void_elements: FrozenSet[str] = DEFAULT_VOID_ELEMENTS

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        self.void_elements = _normalize_tag_set(self.void_elements)


@dataclass
class ApiConfig:
    """Configuration for API layer behavior."""

    # Raise StrictModeError instead of recovering from malformed markup
    strict_mode: bool = False
    json_indent: int = 2
    include_diagnostic_info: bool = True

    def __post_init__(self) -> None:
        """Validate API configuration."""
        if self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for parsing, serializing and the API layer.

    Instances are immutable; use ``override`` to derive a modified copy.
    """

    scan: ScanConfig = field(default_factory=ScanConfig)
    serialize: SerializeConfig = field(default_factory=SerializeConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.scan.__post_init__()
            self.serialize.__post_init__()
            self.api.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        self._validate_cross_component_dependencies()

    def _validate_cross_component_dependencies(self) -> None:
        overlap = self.scan.void_elements & self.scan.raw_text_elements
        if overlap:
            raise ConfigValidationError(
                f"Elements cannot be both void and raw text: {sorted(overlap)}",
                field_name="scan.raw_text_elements",
                suggestions=["Remove the element from scan.void_elements",
                             "Remove the element from scan.raw_text_elements"]
            )

        # Parsed documents only round-trip when both sides agree on void tags
        if self.scan.void_elements != self.serialize.void_elements:
            mismatch = self.scan.void_elements ^ self.serialize.void_elements
            raise ConfigValidationError(
                f"scan and serialize void elements differ: {sorted(mismatch)}",
                field_name="serialize.void_elements",
                suggestions=["Override scan__void_elements and serialize__void_elements together"]
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Top-level fields, or ``component__field`` for nested ones

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig().override(scan__max_depth=50, api__strict_mode=True)
            >>> config.scan.max_depth
            50
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                # global_ itself ends in "_", so match known prefixes first
                component = next(
                    (name for name in _COMPONENTS if key.startswith(name + "__")),
                    key.split("__", 1)[0]
                )
                field_name = key[len(component) + 2:]
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENTS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {}
        for config_field in fields(self):
            value = getattr(self, config_field.name)
            if config_field.name in _COMPONENTS:
                component: Dict[str, Any] = {}
                for sub_field in fields(value):
                    sub_value = getattr(value, sub_field.name)
                    if isinstance(sub_value, frozenset):
                        sub_value = sorted(sub_value)
                    component[sub_field.name] = sub_value
                value = component
            result[config_field.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface.
        """
        component_classes = {
            "scan": ScanConfig,
            "serialize": SerializeConfig,
            "api": ApiConfig,
            "global_": GlobalConfig,
        }
        known = {config_field.name for config_field in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}"
            )

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_classes:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Configuration section '{key}' must be an object",
                        field_name=key
                    )
                try:
                    values[key] = component_classes[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                values[key] = value
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "ParserConfig":
        """Lenient best-effort parsing with the default element sets."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Raise on the first malformed construct instead of recovering."""
        return cls(
            api=ApiConfig(strict_mode=True),
            name="strict",
            description="Reject malformed markup instead of recovering"
        )

    @classmethod
    def extended_raw_text(cls) -> "ParserConfig":
        """Treat style, textarea and title like script content."""
        return cls(
            scan=ScanConfig(raw_text_elements=EXTENDED_RAW_TEXT_ELEMENTS),
            name="extended_raw_text",
            description="Keep script, style, textarea and title content verbatim"
        )
