"""Custom exceptions for earnmove."""


class EarnMoveError(Exception):
    """Base exception for all earnmove errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(EarnMoveError):
    """Required configuration is missing or invalid."""


# Provider errors
class ProviderError(EarnMoveError):
    """Base error for data provider layer."""


class ProviderHTTPError(ProviderError):
    """Provider answered with a status other than 200 or 404."""

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProviderResponseError(ProviderError):
    """Provider response body could not be decoded."""


class UniverseUnavailableError(ProviderError):
    """The symbol universe could not be obtained. Fatal for a run."""


# Storage errors
class StorageError(EarnMoveError):
    """Base error for storage layer."""


class RedisConnectionError(StorageError):
    """Failed to connect to Redis."""


class CacheWriteError(StorageError):
    """Failed to write a summary to the cache."""
