"""
Configuration management for SpringWell projects.

Handles loading and saving the ``.springwell.yml`` file at a project root,
providing defaults for every setting the generators rely on.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .errors import SpringWellError
from .logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = ".springwell.yml"
CONFIG_DIR_NAME = ".springwell"
DEFAULT_PACKAGE = "com.example.service"
DEFAULT_TEMPLATES_DIRECTORY = ".springwell/templates"


class ConfigError(SpringWellError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class ProjectSettings:
    package: str = DEFAULT_PACKAGE
    defaults_directory: str = DEFAULT_TEMPLATES_DIRECTORY


@dataclass
class CodeStyle:
    indentation: int = 4
    line_width: int = 120


@dataclass
class CodeSettings:
    style: CodeStyle = field(default_factory=CodeStyle)
    lombok: bool = True
    standardize_fields: bool = True


@dataclass
class TemplateSettings:
    directory: str = DEFAULT_TEMPLATES_DIRECTORY


@dataclass
class AwsSettings:
    region: str = "us-east-1"
    default_services: List[str] = field(
        default_factory=lambda: ["s3", "secretsManager"]
    )


@dataclass
class SpringWellConfig:
    """Complete configuration for a SpringWell project."""

    project: ProjectSettings = field(default_factory=ProjectSettings)
    code: CodeSettings = field(default_factory=CodeSettings)
    templates: TemplateSettings = field(default_factory=TemplateSettings)
    aws: AwsSettings = field(default_factory=AwsSettings)
    plugins: List[str] = field(default_factory=list)

    def template_override_dir(self, project_dir: Union[str, Path]) -> Path:
        """Directory holding project-specific template overrides."""
        return Path(project_dir) / self.templates.directory


# YAML keys are camelCase; dataclass attributes are snake_case.
_KEY_MAP = {
    "defaultsDirectory": "defaults_directory",
    "lineWidth": "line_width",
    "standardizeFields": "standardize_fields",
    "defaultServices": "default_services",
}
_REVERSE_KEY_MAP = {v: k for k, v in _KEY_MAP.items()}


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Configuration section '{key}' must be a mapping")
    return {_KEY_MAP.get(k, k): v for k, v in value.items()}


def _pick(cls, values: Dict[str, Any]):
    """Build a settings dataclass from the keys it knows about."""
    known = set(cls.__dataclass_fields__)
    ignored = sorted(set(values) - known)
    if ignored:
        logger.debug("Ignoring unknown %s keys: %s", cls.__name__, ignored)
    return cls(**{k: v for k, v in values.items() if k in known})


def config_from_dict(data: Dict[str, Any]) -> SpringWellConfig:
    """Convert a parsed YAML document into a SpringWellConfig."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    code_values = _section(data, "code")
    style_values = code_values.pop("style", None) or {}
    if not isinstance(style_values, dict):
        raise ConfigError("Configuration section 'code.style' must be a mapping")
    style = _pick(CodeStyle, {_KEY_MAP.get(k, k): v for k, v in style_values.items()})

    plugins = data.get("plugins") or []
    if not isinstance(plugins, list):
        raise ConfigError("Configuration key 'plugins' must be a list")

    return SpringWellConfig(
        project=_pick(ProjectSettings, _section(data, "project")),
        code=_pick(CodeSettings, {**code_values, "style": style}),
        templates=_pick(TemplateSettings, _section(data, "templates")),
        aws=_pick(AwsSettings, _section(data, "aws")),
        plugins=[str(p) for p in plugins],
    )


def config_to_dict(config: SpringWellConfig) -> Dict[str, Any]:
    """Convert a SpringWellConfig into the YAML document layout."""

    def rename(value):
        if isinstance(value, dict):
            return {_REVERSE_KEY_MAP.get(k, k): rename(v) for k, v in value.items()}
        return value

    return rename(asdict(config))


def get_default_config() -> SpringWellConfig:
    """Return a default configuration."""
    return SpringWellConfig()


def load_config(project_dir: Union[str, Path] = ".") -> SpringWellConfig:
    """
    Load configuration from ``.springwell.yml`` in ``project_dir``.

    A missing file is not an error; defaults are returned instead.

    Args:
        project_dir: Project root directory

    Returns:
        Loaded configuration merged over defaults

    Raises:
        ConfigError: If the file cannot be read or is not valid YAML
    """
    path = Path(project_dir) / CONFIG_FILE_NAME

    if not path.exists():
        logger.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, project_dir)
        return get_default_config()

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

    if data is None:
        return get_default_config()

    config = config_from_dict(data)
    logger.info("Loaded configuration from %s", path)
    return config


def save_config(
    config: SpringWellConfig, project_dir: Union[str, Path] = "."
) -> Path:
    """
    Save configuration to ``.springwell.yml`` in ``project_dir``.

    Also creates the ``.springwell`` directory used for template overrides.

    Returns:
        Path of the written file
    """
    project_dir = Path(project_dir)
    path = project_dir / CONFIG_FILE_NAME

    try:
        (project_dir / CONFIG_DIR_NAME).mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config_to_dict(config), f, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    logger.info("Saved configuration to %s", path)
    return path
