class DomainError(Exception):
    """Base class for domain-specific errors."""


class DataProviderError(DomainError):
    """Raised when a price source fails to deliver valid data."""


class ChartConfigurationError(DomainError, ValueError):
    """Raised when a chart is configured with an unusable box size or reversal count."""


class UnorderedPriceDataError(DomainError):
    """Raised when price observations are not in chronological order."""
