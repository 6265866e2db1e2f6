"""Custom exception classes for langcat."""


class LangCatError(Exception):
    """Base exception for all langcat errors."""
    pass


class StoreError(LangCatError):
    """Raised when the remote key-value store cannot be read or written."""
    pass


class DecodeError(LangCatError):
    """Raised when a persisted policy value is malformed."""
    pass


class ConfigError(LangCatError):
    """Raised when configuration is invalid or missing."""
    pass
