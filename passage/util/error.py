"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error.

    Raised at startup when required settings are missing or unsafe.
    """

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
