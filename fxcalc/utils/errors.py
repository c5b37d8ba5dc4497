"""Custom exception classes for fxcalc."""


class FxCalcError(Exception):
    """Base exception for all fxcalc errors."""
    pass


class ConfigurationError(FxCalcError):
    """Raised when there's a configuration error."""
    pass


class DataProviderError(FxCalcError):
    """Base exception for rate source errors."""
    pass


class RateLimitError(DataProviderError):
    """Raised when API rate limit is exceeded."""
    pass


class DataNotFoundError(DataProviderError):
    """Raised when requested rates are not available."""
    pass


class ValidationError(FxCalcError):
    """Raised when input validation fails."""
    pass


class StorageError(FxCalcError):
    """Raised when the persistent store cannot be read or written."""
    pass
