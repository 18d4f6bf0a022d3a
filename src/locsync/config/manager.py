"""Configuration manager for locsync.

This module provides functionality for loading, validating, and saving
YAML configuration files with Pydantic model validation, and for turning a
configuration into a ready-to-use LocalizationContext.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..context import LocalizationContext
from ..utils.io.atomic import atomic_write_text
from .schema import LocSyncConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "localization.yml"


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    Provides methods for loading and saving configuration files with atomic
    writes, and for building a LocalizationContext from a configuration.
    """

    @staticmethod
    def load_config(config_path: Path) -> LocSyncConfig:
        """
        Load and validate configuration from a YAML file.

        Relative paths in the file are resolved against the directory
        containing the configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            LocSyncConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the file does not contain a mapping
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        try:
            config = LocSyncConfig.model_validate(config_data)
        except ValidationError as e:
            logger.error(f"Invalid configuration in {config_path}: {e.error_count()} errors")
            raise

        return ConfigManager.resolve_paths(config, config_path.parent)

    @staticmethod
    def resolve_paths(config: LocSyncConfig, base_dir: Path) -> LocSyncConfig:
        """
        Make every relative path of a configuration absolute.

        Args:
            config: Configuration with paths as written in the file
            base_dir: Directory relative paths are resolved against

        Returns:
            A new configuration with absolute paths
        """

        def resolve(value: str) -> str:
            if not value:
                return value
            path = Path(value)
            return str(path if path.is_absolute() else (base_dir / path).resolve())

        sources = [
            source.model_copy(
                update={
                    "storage_folder": resolve(source.storage_folder) if source.storage_folder else None,
                    "folders": [resolve(folder) for folder in source.folders],
                }
            )
            for source in config.sources
        ]
        return config.model_copy(
            update={
                "storage_folder": resolve(config.storage_folder),
                "client_libraries_folder": resolve(config.client_libraries_folder),
                "sources": sources,
            }
        )

    @staticmethod
    def save_config(config: LocSyncConfig, config_path: Path) -> None:
        """
        Save configuration to a YAML file with atomic operation.

        Args:
            config: Configuration object to save
            config_path: Path where to save the configuration

        Raises:
            OSError: If file operations fail
            yaml.YAMLError: If YAML serialization fails
        """
        content_to_write = yaml.dump(
            config.model_dump(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
        atomic_write_text(config_path, content_to_write)
        logger.info(f"Configuration saved to {config_path}")

    @staticmethod
    def build_context(config: LocSyncConfig) -> LocalizationContext:
        """
        Create a LocalizationContext from a configuration.

        Locales are added and selected, sources registered, and the context
        is configured. Configuring writes the client libraries when an
        output folder is set.

        Args:
            config: Validated configuration with absolute paths

        Returns:
            The configured context
        """
        context = LocalizationContext()

        for name in config.app_locales:
            _ = context.add_app_locale(name)
        for name in config.content_locales:
            _ = context.add_content_locale(name)
        if config.selected_app_locale:
            _ = context.select_app_locale(config.selected_app_locale)
        if config.selected_content_locale:
            _ = context.select_content_locale(config.selected_content_locale)

        context.set_client_cache_key(config.client_cache_key)

        for source_config in config.sources:
            source = context.add_folder_source(
                alias=source_config.alias,
                label=source_config.label,
                group=source_config.group,
                folders=source_config.folders,
                storage_folder=source_config.storage_folder or config.storage_folder,
            )
            _ = source.exclude_folders(source_config.exclude_folders)
            _ = source.exclude_files(source_config.exclude_files)

        context.configure(config.storage_folder, config.client_libraries_folder)
        logger.debug(f"Built context with {len(config.sources)} sources")
        return context
