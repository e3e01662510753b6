"""Generator configuration loaded from ``.autodoc.yml``."""

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from openapi_autodoc.errors import ConfigError

logger = structlog.get_logger()

CONFIG_NAMES = (".autodoc.yml", ".autodoc.yaml", "autodoc.yml")


class GeneratorConfig(BaseModel):
    """Document metadata and parsing options."""

    model_config = ConfigDict(extra="forbid")

    title: str = "API Specification"
    version: str = "v1"
    description: str = "For using the Example App API"
    openapi_version: str = "3.0.2"
    servers: list[str] = []
    # {field: {rule: message}}
    custom_messages: dict[str, dict[str, str]] = {}
    faker_seed: int | None = 0
    faker_locale: str = "en_US"

    def message_overrides(self) -> dict[tuple[str, str], str]:
        return {
            (field, rule): message
            for field, rules in self.custom_messages.items()
            for rule, message in rules.items()
        }


def parse_config(text: str) -> GeneratorConfig:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")
    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Path | None = None, project_dir: Path | None = None) -> GeneratorConfig:
    """Load ``path``, or the first known config file in ``project_dir``."""
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        logger.info("Loading config", path=str(path))
        return parse_config(path.read_text(encoding="utf-8"))

    project_dir = project_dir or Path.cwd()
    for name in CONFIG_NAMES:
        config_file = project_dir / name
        if config_file.exists():
            logger.info("Loading config", path=str(config_file))
            return parse_config(config_file.read_text(encoding="utf-8"))

    logger.debug("No config file found, using defaults")
    return GeneratorConfig()
