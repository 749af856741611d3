"""
Configuration management for component generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import GeneratorError
from .schema import ArtifactKind


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for the component generator."""

    # Request defaults offered to delivery surfaces
    default_package: str = "com.example.aem.core"
    default_project: str = "myproject"

    # Artifact header settings
    author: str = "AEM Component Generator"
    include_timestamp: bool = False

    # Which artifacts are generated when a request does not say
    artifacts: Dict[str, bool] = field(
        default_factory=lambda: {kind.value: True for kind in ArtifactKind}
    )

    # Rendering
    template_dir: Optional[str] = None
    help_path: str = (
        "https://docs.adobe.com/content/help/en/experience-manager-core-components/"
        "using/components/"
    )

    # Form handling
    debounce_ms: int = 300

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    def artifact_enabled(self, kind: ArtifactKind) -> bool:
        """Whether an artifact kind is enabled by default."""
        return bool(self.artifacts.get(kind.value, True))

    def default_toggles(self) -> Dict[ArtifactKind, bool]:
        """Default artifact toggles keyed by kind."""
        return {kind: self.artifact_enabled(kind) for kind in ArtifactKind}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = json.loads(json.dumps(self._defaults))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Merge overrides into base; the artifacts mapping is merged key by key."""
        for key, value in overrides.items():
            if key == "artifacts" and isinstance(value, dict):
                base.setdefault("artifacts", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not re.match(r"^[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)*$", config.default_package):
            warnings.append(f"Invalid default_package: {config.default_package}")

        if not re.match(r"^[a-z][a-z0-9]*$", config.default_project):
            warnings.append(f"Invalid default_project: {config.default_project}")

        known_kinds = {kind.value for kind in ArtifactKind}
        for name in config.artifacts:
            if name not in known_kinds:
                warnings.append(f"Unknown artifact kind in artifacts: {name}")

        if not any(config.artifacts.get(k, True) for k in known_kinds):
            warnings.append("All artifacts are disabled")

        if config.debounce_ms < 0:
            warnings.append(f"Invalid debounce_ms: {config.debounce_ms}")

        if config.template_dir and not Path(config.template_dir).is_dir():
            warnings.append(f"Template directory not found: {config.template_dir}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)

