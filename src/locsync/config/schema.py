"""Configuration schema for locsync using nested Pydantic models."""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from ..locales.catalog import NATIVE_LOCALE_NAME, get_supported_locale_names

_LOCALE_PATTERN = re.compile(r"^[a-z]{2}_[A-Z]{2}$")
_ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _validate_locale_name(value: str) -> str:
    if not _LOCALE_PATTERN.match(value):
        raise ValueError(f"Locale '{value}' must look like xx_YY (e.g. de_DE)")
    if value not in get_supported_locale_names():
        raise ValueError(
            f"Locale '{value}' is not supported. Supported locales: {', '.join(get_supported_locale_names())}"
        )
    return value


class SourceConfig(BaseModel):
    """A folder source to scan for translatable strings."""

    alias: str = Field(
        ...,
        description="Short unique name, used in storage file names",
        min_length=1,
    )
    label: str = Field(
        ...,
        description="Human readable name of the source",
        min_length=1,
    )
    group: str = Field(
        default="",
        description="Group the source is listed under",
    )
    storage_folder: str | None = Field(
        default=None,
        description="Folder for the registry and translation files (defaults to the global storage folder)",
    )
    folders: list[str] = Field(
        ...,
        description="Root folders to scan",
        min_length=1,
    )
    exclude_folders: list[str] = Field(
        default_factory=list,
        description="Folder names to skip (exact match)",
    )
    exclude_files: list[str] = Field(
        default_factory=list,
        description="File name fragments to skip (case-insensitive substring match)",
    )

    @field_validator("alias")
    @classmethod
    def validate_alias(cls, v: str) -> str:
        """Validate that the alias can be used in file names."""
        if not _ALIAS_PATTERN.match(v):
            raise ValueError("Source alias may only contain letters, digits, '_' and '-'")
        return v


class LocSyncConfig(BaseModel):
    """Root configuration model."""

    storage_folder: str = Field(
        ...,
        description="Default folder for registries and translation files",
        min_length=1,
    )
    client_libraries_folder: str = Field(
        default="",
        description="Output folder of the client libraries (empty disables them)",
    )
    client_cache_key: str = Field(
        default="",
        description="Cache-busting key of the client libraries",
    )
    app_locales: list[str] = Field(
        default_factory=list,
        description="Application (UI) locales to translate into",
    )
    content_locales: list[str] = Field(
        default_factory=list,
        description="Content (user data) locales",
    )
    selected_app_locale: str | None = Field(
        default=None,
        description="Application locale to select after loading",
    )
    selected_content_locale: str | None = Field(
        default=None,
        description="Content locale to select after loading",
    )
    sources: list[SourceConfig] = Field(
        default_factory=list,
        description="Sources to scan",
    )

    @field_validator("app_locales", "content_locales")
    @classmethod
    def validate_locales(cls, v: list[str]) -> list[str]:
        """Validate locale names against the catalog."""
        return [_validate_locale_name(name) for name in v]

    @field_validator("selected_app_locale", "selected_content_locale")
    @classmethod
    def validate_selected_locale(cls, v: str | None) -> str | None:
        """Validate the selected locale names."""
        if v is None:
            return v
        return _validate_locale_name(v)

    @model_validator(mode="after")
    def validate_consistency(self) -> "LocSyncConfig":
        """Check that selections refer to configured locales and aliases are unique."""
        if self.selected_app_locale not in (None, NATIVE_LOCALE_NAME, *self.app_locales):
            raise ValueError(f"selected_app_locale '{self.selected_app_locale}' is not in app_locales")
        if self.selected_content_locale not in (None, NATIVE_LOCALE_NAME, *self.content_locales):
            raise ValueError(
                f"selected_content_locale '{self.selected_content_locale}' is not in content_locales"
            )

        aliases = [source.alias for source in self.sources]
        duplicates = sorted({alias for alias in aliases if aliases.count(alias) > 1})
        if duplicates:
            raise ValueError(f"Duplicate source aliases: {', '.join(duplicates)}")
        return self
