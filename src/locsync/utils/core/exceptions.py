"""
Basic exception classes for locsync.

This module contains the exception hierarchy used throughout the codebase
without creating import cycles. Every error carries a category, a severity,
a numeric code that callers can switch on, and a human-readable explanation.
"""

from __future__ import annotations

from enum import Enum
from typing import override


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    CONFIGURATION = "configuration"
    LEXICAL = "lexical"
    FILESYSTEM = "filesystem"
    RECONCILIATION = "reconciliation"
    UNKNOWN = "unknown"


class ErrorCode:
    """Numeric error codes, stable across releases."""

    UNKNOWN_CONTENT_LOCALE = 39001
    UNKNOWN_APPLICATION_LOCALE = 39002
    NO_STORAGE_LOCATION = 39003
    CONFIGURE_NOT_CALLED = 39004
    NO_SOURCES_ADDED = 39005
    NO_LOCALE_SELECTED_IN_NS = 39006
    NO_LOCALES_IN_NAMESPACE = 39007
    UNKNOWN_NAMESPACE = 39008
    UNKNOWN_LOCALE_IN_NS = 39009
    UNKNOWN_EVENT = 39010
    LOCALE_NOT_FOUND = 39011
    COUNTRY_NOT_FOUND = 39012
    CURRENCY_NOT_FOUND = 39013
    UNKNOWN_SOURCE = 39014
    REGISTRY_CORRUPTED = 39015
    TRANSLATION_FILE_INVALID = 39016
    SOURCE_FOLDER_INVALID = 39017
    DUPLICATE_SOURCE = 39018
    GENERIC = 39000


class LocSyncError(Exception):
    """Base exception class for locsync specific errors."""

    def __init__(
        self,
        message: str,
        details: str = "",
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: int = ErrorCode.GENERIC,
        user_message: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.details: str = details
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.code: int = code
        self.user_message: str = user_message or message
        self.recoverable: bool = recoverable

    @override
    def __str__(self) -> str:
        message = super().__str__()
        if self.details:
            return f"{message} {self.details}"
        return message


class ConfigurationError(LocSyncError):
    """Configuration-related errors. Fatal, never retried automatically."""

    default_code: int = ErrorCode.GENERIC

    def __init__(
        self,
        message: str,
        details: str = "",
        code: int | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            message,
            details=details,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            code=code if code is not None else self.default_code,
            user_message=user_message,
            recoverable=False,
        )


class NotConfiguredError(ConfigurationError):
    """The context has not been configured yet."""

    default_code = ErrorCode.CONFIGURE_NOT_CALLED


class NoStorageLocationError(ConfigurationError):
    """No storage folder is available for a source."""

    default_code = ErrorCode.NO_STORAGE_LOCATION


class NoSourcesError(ConfigurationError):
    """No source folders have been registered."""

    default_code = ErrorCode.NO_SOURCES_ADDED


class UnknownNamespaceError(ConfigurationError):
    """A locale namespace was requested that does not exist."""

    default_code = ErrorCode.UNKNOWN_NAMESPACE


class UnknownLocaleError(ConfigurationError):
    """A locale was requested that has not been added to a namespace."""

    default_code = ErrorCode.UNKNOWN_LOCALE_IN_NS


class NoLocaleSelectedError(ConfigurationError):
    """No locale is selected in a namespace."""

    default_code = ErrorCode.NO_LOCALE_SELECTED_IN_NS


class LocaleNotFoundError(ConfigurationError):
    """The locale name is not part of the supported locale catalog."""

    default_code = ErrorCode.LOCALE_NOT_FOUND


class CountryNotFoundError(ConfigurationError):
    """The country code is not part of the catalog."""

    default_code = ErrorCode.COUNTRY_NOT_FOUND


class CurrencyNotFoundError(ConfigurationError):
    """The currency ISO code is not part of the catalog."""

    default_code = ErrorCode.CURRENCY_NOT_FOUND


class UnknownSourceError(ConfigurationError):
    """A source was requested by ID or alias that has not been added."""

    default_code = ErrorCode.UNKNOWN_SOURCE


class DuplicateSourceError(ConfigurationError):
    """A source reuses the alias or the root folders of another source."""

    default_code = ErrorCode.DUPLICATE_SOURCE


class UnknownEventError(ConfigurationError):
    """A listener was registered for an event type that does not exist."""

    default_code = ErrorCode.UNKNOWN_EVENT


class SourceFolderError(ConfigurationError):
    """A configured source root is missing or is not a directory."""

    default_code = ErrorCode.SOURCE_FOLDER_INVALID


class RegistryCorruptedError(ConfigurationError):
    """The persisted string registry cannot be read."""

    default_code = ErrorCode.REGISTRY_CORRUPTED


class TranslationFileError(ConfigurationError):
    """A translation file contains a line that cannot be parsed."""

    default_code = ErrorCode.TRANSLATION_FILE_INVALID
