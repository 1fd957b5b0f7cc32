"""Configuration classes for XML node parsing.

This module provides configuration objects for the grammar, tree, reader and
logging layers. Component configurations validate themselves on creation; the
aggregate :class:`ParserConfig` is immutable and safe to share between threads.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENTS = ("grammar", "tree", "reader", "global_")
_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GrammarConfig:
    """Configuration for the grammar and tokenizer layer."""

    allow_declaration: bool = True
    allow_single_quotes: bool = True
    max_depth: int = 256  # Nested elements; bounded by the interpreter stack

    def __post_init__(self) -> None:
        """Validate grammar configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.max_depth > 500:
            raise ValueError("max_depth must be <= 500")


@dataclass
class TreeConfig:
    """Configuration for tree building and rendering."""

    render_indent: int = 2

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.render_indent < 1:
            raise ValueError("render_indent must be >= 1")


@dataclass
class ReaderConfig:
    """Configuration for reading and decoding document sources."""

    default_encoding: str = "utf-8"
    detect_bom: bool = True
    honor_declared_encoding: bool = True

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if not self.default_encoding:
            raise ValueError("default_encoding cannot be empty")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {list(_LOGGING_LEVELS)}")


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
    """Complete configuration for the XML node parser.

    Thread-safe due to frozen dataclass implementation.
    """

    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        for component in _COMPONENTS:
            try:
                getattr(self, component).__post_init__()
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; component fields use the
                ``component__field`` notation (``global__field`` for
                the global component)

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig().override(grammar__max_depth=64)
            >>> config.grammar.max_depth
            64
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component == "global":
                    component = "global_"
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        for component, overrides in nested_overrides.items():
            try:
                new_fields[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        pass silently.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            if not isinstance(data_dict, dict):
                raise ConfigValidationError(
                    f"Expected a mapping for {target_class.__name__}"
                )
            known = target_class.__dataclass_fields__
            unknown = sorted(set(data_dict) - set(known))
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {target_class.__name__} fields: {', '.join(unknown)}",
                    field_name=unknown[0],
                )

            field_values: Dict[str, Any] = {}
            for field_name, value in data_dict.items():
                field_type = known[field_name].type
                if hasattr(field_type, "__dataclass_fields__"):
                    field_values[field_name] = _dict_to_dataclass(value, field_type)
                else:
                    field_values[field_name] = value
            try:
                return target_class(**field_values)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e)) from e

        result = _dict_to_dataclass(data, cls)
        if not isinstance(result, cls):
            raise ConfigValidationError(f"Failed to deserialize to {cls.__name__}")
        return result

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create preset accepting only double-quoted attributes and shallow trees."""
        return cls(
            grammar=GrammarConfig(allow_single_quotes=False, max_depth=64),
            global_=GlobalConfig(logging_level="INFO"),
            name="strict",
            description="Double-quoted attributes only, nesting limited to 64 levels",
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Create preset for deeply nested documents."""
        return cls(
            grammar=GrammarConfig(max_depth=500),
            name="lenient",
            description="Both quote styles, nesting up to 500 levels",
        )
