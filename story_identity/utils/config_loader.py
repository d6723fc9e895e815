"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from story_identity.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from story_identity.utils.logging import get_logger

if TYPE_CHECKING:
    from story_identity.models.config import IdentityConfig

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def load_yaml_config(file_path: Path | str, model_class: type[T]) -> T:
    """
    Load and validate YAML configuration file.

    Args:
        file_path: Path to YAML configuration file
        model_class: Pydantic model class to validate against

    Returns:
        Validated configuration instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
        yaml.YAMLError: If YAML is malformed

    Examples:
        >>> from story_identity.models.config import IdentityConfig
        >>> config = load_yaml_config("config/identity.yaml", IdentityConfig)
    """
    path = Path(file_path)

    if not path.exists():
        logger.error("Configuration file not found", path=str(path))
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("r") as f:
            raw_config = yaml.safe_load(f)

        # An empty file means "all defaults"
        config = model_class.model_validate(raw_config or {})
        logger.info("Configuration loaded", path=str(path), model=model_class.__name__)
        return config

    except yaml.YAMLError as e:
        logger.error("Invalid YAML syntax", path=str(path), error=str(e))
        raise

    except ValidationError as e:
        logger.error("Configuration validation failed", path=str(path), error=str(e))
        raise


def load_identity_config(file_path: Path | str | None = None) -> "IdentityConfig":
    """
    Load the library configuration.

    Resolution order: the explicit ``file_path``, then the
    ``STORY_IDENTITY_CONFIG`` environment variable (``.env`` files are read
    first), then ``config/identity.yaml``. Only the implicit default path may
    be missing, in which case built-in defaults are returned.

    Args:
        file_path: Path to identity.yaml file

    Returns:
        IdentityConfig instance
    """
    from story_identity.models.config import IdentityConfig

    if file_path is not None:
        return load_yaml_config(file_path, IdentityConfig)

    load_dotenv()
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_yaml_config(env_path, IdentityConfig)

    default_path = Path(DEFAULT_CONFIG_PATH)
    if not default_path.exists():
        logger.debug("No configuration file found, using defaults", path=str(default_path))
        return IdentityConfig()

    return load_yaml_config(default_path, IdentityConfig)
