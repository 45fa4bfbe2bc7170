"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when settings are unsafe or inconsistent for the environment."""

    pass
